"""Plotly figure builders for the daily range chart."""

from __future__ import annotations

import plotly.graph_objects as go
import pandas as pd


def make_volatility_chart(window: pd.DataFrame, title: str, show_markers: bool = False) -> go.Figure:
    """Build a line chart of the daily high-low range."""
    fig = go.Figure()

    if window.empty:
        fig.add_annotation(text="No data to display", showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
        fig.update_layout(title=title, template="plotly_white")
        return fig

    mode = "lines+markers" if show_markers else "lines"

    fig.add_trace(
        go.Scatter(
            x=window["date"],
            y=window["volatility"],
            mode=mode,
            name="Daily range",
            line=dict(color="#4f46e5", width=2),
            marker=dict(size=5) if show_markers else None,
            customdata=window[["high", "low"]].to_numpy(),
            hovertemplate="%{x|%Y-%m-%d}<br>Range %{y:.0f}<br>High %{customdata[0]:.2f}<br>Low %{customdata[1]:.2f}<extra></extra>",
        )
    )

    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title="High - Low",
        hovermode="x unified",
        template="plotly_white",
        showlegend=False,
    )
    fig.update_xaxes(tickformat="%m/%d")

    return fig
