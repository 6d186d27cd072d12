"""
canvas.py — SVG Bar Chart Renderer
===================================
Pure rendering function: displayed state → SVG string.

The renderer consumes:
  • sequence   – the displayed values (one bar each)
  • comparing  – indices highlighted as being compared
  • swapping   – indices highlighted as being swapped
  • config     – visual config (canvas size, colors, …)

Design decisions:
  - NO mutation.  The caller passes in a CursorView (or the three
    pieces) and gets back a string.
  - Bar height is value / max(value) of the current sequence; values
    ≤ 0 get a 2px stub so they stay visible.
  - Comparing wins over swapping when an index is in both sets.
  - Value labels only when the bars are wide enough (≤ 20 bars).
"""

from typing import Dict, Optional, Sequence

from engine.cursor import CursorView


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:   int = 900
    height:  int = 420
    bg:      str = "#0d1117"
    padding: int = 16
    gap:     int = 2

    bar_colors: Dict[str, str] = {
        "default":   "#0ea5e9",   # cyan
        "comparing": "#eab308",   # yellow
        "swapping":  "#22c55e",   # green
    }

    # how far a highlighted bar is lifted, in px
    lift: Dict[str, int] = {
        "default":   0,
        "comparing": 5,
        "swapping":  15,
    }

    label_color:  str = "#e6edf3"
    label_size:   int = 11
    label_limit:  int = 20
    min_bar:      int = 2


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    sequence: Sequence[int],
    comparing: Sequence[int] = (),
    swapping: Sequence[int] = (),
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        sequence  : Values to draw, left to right.
        comparing : Indices drawn in the comparing color.
        swapping  : Indices drawn in the swapping color.
        config    : Visual config.
    """
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    n = len(sequence)
    if n:
        peak = max(max(sequence), 1)
        usable_w = config.width - 2 * config.padding
        usable_h = config.height - 2 * config.padding - max(config.lift.values())
        bar_w = usable_w / n
        comparing, swapping = set(comparing), set(swapping)

        for i, value in enumerate(sequence):
            state = _bar_state(i, comparing, swapping)
            h = max(config.min_bar, usable_h * value / peak) if value > 0 else config.min_bar
            x = config.padding + i * bar_w
            y = config.height - config.padding - h - config.lift[state]
            svg_parts.append(_render_bar(i, value, x, y, bar_w, h, state, n, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def render_view(view: Optional[CursorView], config: CanvasConfig = CONFIG) -> str:
    """render_bars() for a CursorView (None renders an empty canvas)."""
    if view is None:
        return render_bars((), config=config)
    return render_bars(view.sequence, view.comparing, view.swapping, config)


# ---------------------------------------------------------------------------
# Bar Rendering
# ---------------------------------------------------------------------------
def _bar_state(i: int, comparing: set, swapping: set) -> str:
    if i in comparing:
        return "comparing"
    if i in swapping:
        return "swapping"
    return "default"


def _render_bar(
    i: int,
    value: int,
    x: float,
    y: float,
    bar_w: float,
    h: float,
    state: str,
    n: int,
    config: CanvasConfig,
) -> str:
    w = max(1.0, bar_w - config.gap)
    fill = config.bar_colors[state]
    parts = [
        f'<g class="bar {state}" data-index="{i}" data-value="{value}">',
        f'  <rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" fill="{fill}" rx="1"/>',
    ]
    if n <= config.label_limit:
        parts.append(
            f'  <text x="{x + w / 2:.2f}" y="{y + h - 4:.2f}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="\'DM Sans\', sans-serif" '
            f'fill="{config.label_color}" font-weight="700">{value}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)
