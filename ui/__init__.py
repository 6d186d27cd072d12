"""
ui/
---
Presentation layer.

    from ui import render_bars, render_view
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, render_view, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    algorithm_info,
    array_controls,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    legend,
    status_line,
)

__all__ = [
    "render_bars",
    "render_view",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "algorithm_info",
    "array_controls",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "legend",
    "status_line",
]
