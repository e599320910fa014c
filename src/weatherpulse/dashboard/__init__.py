"""Charts and the streamlit dashboard."""

from weatherpulse.dashboard.charts import (
    build_charts,
    create_bar_chart,
    create_box_chart,
    create_scatter_chart,
    write_charts,
)

__all__ = [
    "build_charts",
    "create_bar_chart",
    "create_box_chart",
    "create_scatter_chart",
    "write_charts",
]
