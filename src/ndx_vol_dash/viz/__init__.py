"""Chart builders."""

from .volatility_charts import make_volatility_chart

__all__ = ["make_volatility_chart"]
