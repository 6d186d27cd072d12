"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – sort/stop/step buttons + 1..100 speed slider
  • algorithm_selector  – dropdown of registered algorithms
  • algorithm_info      – description, complexity + tags of the selection
  • array_controls      – size slider, random array, custom input
  • analytics_panel     – compares, swaps, events, wall time, …
  • comparison_panel    – side-by-side metrics of two runs
  • pseudocode_viewer   – the selected algorithm's pseudocode
  • legend              – color key
  • status_line         – ready / sorting / sorted

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo
from engine import ComparisonResult, RunMetrics
from ui.canvas import CONFIG


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_frame: int = 0,
    total_frames: int = 0,
    speed: int = 50,
    has_array: bool = True,
    is_sorted: bool = False,
) -> str:
    # a sorted array stays locked until a new one is generated
    sort_disabled = "disabled" if is_playing or is_sorted or not has_array else ""
    stop_disabled = "" if is_playing else "disabled"

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-sort" class="btn-primary" {sort_disabled}>▶ Sort</button>
        <button id="btn-stop" class="btn-secondary" {stop_disabled}>■ Stop</button>
      </div>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current_frame}</span> / <span id="total-steps">{total_frames}</span>
      </div>
      <div class="speed-control">
        <label for="speed-slider">Speed: <span id="speed-val">{speed}</span></label>
        <input type="range" id="speed-slider" min="1" max="100" step="1" value="{speed}">
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    disabled: bool = False,
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(f'<option value="{algo.key}" {sel}>{algo.label}</option>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Sorting Algorithm</h3>
      <select id="algo-selector" {'disabled' if disabled else ''}>
        {''.join(options)}
      </select>
    </div>
    """


def algorithm_info(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return '<div class="algo-info"><p class="placeholder">Select an algorithm.</p></div>'

    stable = "stable" if info.stable else "not stable"
    tags = " ".join(f'<span class="tag">{escape(t)}</span>' for t in info.tags)
    return f"""
    <div class="algo-info">
      <p><strong>{escape(info.label)}:</strong> {escape(info.description)}</p>
      <p>Time Complexity: {escape(info.complexity_time)} · Space: {escape(info.complexity_space)} · {stable}</p>
      <p class="tags">{tags}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls
# ---------------------------------------------------------------------------
def array_controls(
    size: int = 50,
    min_size: int = 5,
    max_size: int = 100,
    custom_text: str = "",
    disabled: bool = False,
) -> str:
    dis = 'disabled' if disabled else ''
    return f"""
    <div class="panel array-controls">
      <h3>📶 Array</h3>
      <label for="size-slider">Array Size: <span id="size-val">{size}</span></label>
      <input type="range" id="size-slider" min="{min_size}" max="{max_size}" step="1" value="{size}" {dis}>
      <button id="btn-random" class="btn-secondary" {dis}>Random Array</button>
      <label for="custom-input">Custom Input (comma-separated)</label>
      <div class="button-row">
        <input type="text" id="custom-input" value="{escape(custom_text)}"
               placeholder="e.g., 64, 34, 25, 12, 22, 11, 90" {dis}>
        <button id="btn-set-custom" class="btn-secondary" {dis}>Set</button>
      </div>
      <p id="array-error" class="error"></p>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Sort the array to see metrics.</p>
        </div>
        """

    verified = "✅ Sorted" if metrics.verified else "❌ Mismatch"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Elements:</td><td><strong>{metrics.size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Updates:</td><td><strong>{metrics.updates}</strong></td></tr>
        <tr><td>Total Events:</td><td><strong>{metrics.total_events}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Replay:</td><td><strong>{verified}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(
    comp: Optional[ComparisonResult] = None,
    algorithms: Optional[List[AlgoInfo]] = None,
) -> str:
    if not comp:
        options = "".join(
            f'<option value="{a.key}">{a.label}</option>' for a in (algorithms or [])
        )
        return f"""
        <div class="panel comparison-panel">
          <h3>⚖️ Compare</h3>
          <p class="placeholder">Run two algorithms on the same array.</p>
          <select id="compare-left">{options}</select>
          <select id="compare-right">{options}</select>
          <button id="btn-compare" class="btn-secondary">Compare</button>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {escape(winner_label)}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {escape(left.algo_label)} vs {escape(right.algo_label)}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{escape(left.algo_label)}</th>
            <th>{escape(right.algo_label)}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td>
            <td>{left.comparisons}</td>
            <td>{right.comparisons}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Swaps</td>
            <td>{left.swaps}</td>
            <td>{right.swaps}</td>
            <td>{winner_badge(comp.winner_swaps)}</td>
          </tr>
          <tr>
            <td>Total Events</td>
            <td>{left.total_events}</td>
            <td>{right.total_events}</td>
            <td>{winner_badge(comp.winner_events)}</td>
          </tr>
          <tr>
            <td>Wall Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: str = "",
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block" data-algo="{escape(algo_label)}">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Legend & status
# ---------------------------------------------------------------------------
def legend() -> str:
    colors = CONFIG.bar_colors
    return f"""
    <div class="legend">
      <span><i style="background: {colors['default']}"></i>Unsorted</span>
      <span><i style="background: {colors['comparing']}"></i>Comparing</span>
      <span><i style="background: {colors['swapping']}"></i>Swapping</span>
    </div>
    """


def status_line(is_playing: bool = False, is_sorted: bool = False) -> str:
    if is_playing:
        text = "Sorting in progress..."
    elif is_sorted:
        text = "Array sorted!"
    else:
        text = "Ready to sort"
    return f'<div id="status" class="status">{text}</div>'
