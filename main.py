"""Streamlit entrypoint for the NASDAQ-100 daily range dashboard."""

from __future__ import annotations

import sys
from pathlib import Path

# --- Ensure src is on path for local imports ---
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import streamlit as st

from ndx_vol_dash import TimeRange  # noqa: E402
from ndx_vol_dash.config import Settings  # noqa: E402
from ndx_vol_dash.domain import TIME_RANGE_DAYS  # noqa: E402
from ndx_vol_dash.services import DashboardSession, build_metric_cards  # noqa: E402
from ndx_vol_dash.utils import format_update_time, get_logger  # noqa: E402
from ndx_vol_dash.viz import make_volatility_chart  # noqa: E402

logger = get_logger(__name__)

DEFAULT_RANGE: TimeRange = "30d"


def get_session() -> DashboardSession:
    """One session per browser tab, started on first render."""
    if "volatility_session" not in st.session_state:
        settings = Settings()
        logger.info("Starting dashboard session for %s", settings.symbol)
        st.session_state.volatility_session = DashboardSession(settings=settings).start()
    return st.session_state.volatility_session


def render_metric_cards(session: DashboardSession) -> None:
    cards = build_metric_cards(session.metrics())
    for row_start in range(0, len(cards), 4):
        columns = st.columns(4)
        for column, (title, value) in zip(columns, cards[row_start : row_start + 4]):
            column.metric(title, f"{value:.0f}")


def render_chart(session: DashboardSession) -> None:
    head_left, head_right = st.columns([3, 2])
    head_left.subheader("Range trend")
    with head_right:
        time_range = st.radio(
            "Range",
            options=list(TIME_RANGE_DAYS.keys()),
            index=list(TIME_RANGE_DAYS.keys()).index(DEFAULT_RANGE),
            horizontal=True,
            key="time_range",
            label_visibility="collapsed",
        )

    window = session.chart_window(time_range)
    chart = make_volatility_chart(window, title=f"{session.settings.symbol} daily high-low ({time_range})", show_markers=time_range == "7d")
    st.plotly_chart(chart, use_container_width=True)


@st.fragment(run_every="60s")
def render_dashboard() -> None:
    session = get_session()

    if session.last_error:
        st.warning(f"Latest refresh failed, showing previous data: {session.last_error}")
    if not session.has_data:
        st.info("Waiting for the first data refresh...")

    render_metric_cards(session)
    st.divider()
    render_chart(session)

    state = session.refresh_state
    st.caption(
        f"Last update: {format_update_time(state.last_update)} · "
        f"Next update: {format_update_time(state.next_update)}"
    )


def main() -> None:
    st.set_page_config(page_title="NASDAQ-100 Volatility", layout="wide")
    st.title("NASDAQ-100 Daily Range")
    st.caption("Streamlit + yfinance + Plotly")

    session = get_session()
    if st.sidebar.button("🔄 Refresh now", help="Fetch the latest daily ranges immediately"):
        with st.spinner("Fetching daily ranges..."):
            session.refresh()

    render_dashboard()


if __name__ == "__main__":
    main()
