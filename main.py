"""
main.py — Sorting Visualizer Flask App
========================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  POST /api/array/random       – generate a new random array
  POST /api/array/custom       – set the array from comma-separated text
  POST /api/config/algo        – select the algorithm
  POST /api/config/speed       – set the 1..100 speed
  POST /api/run                – record a trace and start playing it
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/step/end           – jump to the sorted result
  POST /api/step/stop          – stop playback
  GET  /api/state              – current app state
  GET  /api/export             – the active run as JSON (events, metrics, result)
  POST /api/compare            – run two algorithms on the current array

State management:
  Small values live in the Flask session:
    • array           – the sequence to sort
    • selected_algo
    • speed / size
    • run_id          – key of the active run
    • sorted          – set once a run reaches its final frame; the
                        result replaces the array and Sort stays
                        locked until a new array is set
  Runs themselves (trace + Stepper) are kept in the in-process RUNS
  store, one per run_id.  Starting a new run, or changing the array,
  discards the previous one.  The browser drives playback by calling
  /api/step/next every `delay_ms`.
"""

from flask import Flask, render_template_string, request, jsonify, session
import logging
import secrets
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import settings
from algorithms import list_algorithms, resolve_algorithm
from engine import (
    ConcurrentPlaybackRejected,
    Recorder,
    Stepper,
    compare,
    speed_to_delay_ms,
)
from sequence import InvalidInput, is_sorted, parse_custom_input, random_sequence
from ui import (
    render_bars,
    render_view,
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

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = settings.secret_key

# run_id → {"recorder": Recorder, "stepper": Stepper}
RUNS = {}
MAX_RUNS = 256


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_array():
    """Current array from session, or a fresh random one."""
    if "array" not in session:
        session["array"] = random_sequence(
            get_state()["size"], settings.value_low, settings.value_high
        )
    return list(session["array"])


def get_state():
    """Return current app state as a dict."""
    return {
        "selected_algo": session.get("selected_algo", settings.default_algorithm),
        "speed":         session.get("speed", settings.default_speed),
        "size":          session.get("size", settings.default_size),
        "run_id":        session.get("run_id"),
        "custom_text":   session.get("custom_text", ""),
        "sorted":        session.get("sorted", False),
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def clamp(value, low, high):
    try:
        return max(low, min(high, int(value)))
    except (TypeError, ValueError):
        raise InvalidInput(f"Expected a number, got {value!r}")


# ---------------------------------------------------------------------------
# Run Store Helpers
# ---------------------------------------------------------------------------
def current_run():
    run_id = session.get("run_id")
    return RUNS.get(run_id) if run_id else None


def current_stepper():
    run = current_run()
    return run["stepper"] if run else None


def ensure_idle():
    """Reject anything that would race an active playback."""
    stepper = current_stepper()
    if stepper is not None and stepper.is_playing:
        raise ConcurrentPlaybackRejected("A sort is playing; stop it first")


def drop_run():
    run_id = session.pop("run_id", None)
    if run_id:
        RUNS.pop(run_id, None)


def store_run(recorder: Recorder, stepper: Stepper) -> str:
    drop_run()
    while len(RUNS) >= MAX_RUNS:
        RUNS.pop(next(iter(RUNS)))
    run_id = secrets.token_hex(8)
    RUNS[run_id] = {"recorder": recorder, "stepper": stepper}
    session["run_id"] = run_id
    return run_id


def record_finish(stepper: Stepper):
    """Once the final frame is shown the sorted result becomes the array."""
    run = current_run()
    if run is not None and stepper.is_finished:
        result = list(run["recorder"].result)
        set_state(array=result, sorted=is_sorted(result))


def frame_payload(stepper: Stepper):
    frame = stepper.current_frame
    payload = {
        "svg":          render_view(frame.view if frame else None),
        "frame":        frame.to_dict() if frame else None,
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_frames,
        "is_playing":   stepper.is_playing,
        "is_finished":  stepper.is_finished,
        "is_sorted":    get_state()["sorted"],
    }

    run = current_run()
    info = run["recorder"].algo_info if run else None
    if info is not None:
        line = info.pseudocode_line(frame.event if frame else None)
        payload["pseudocode"] = pseudocode_viewer(info.pseudocode, line, info.label)
    return payload


# ---------------------------------------------------------------------------
# Error Handlers
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInput)
def handle_invalid_input(err):
    logger.warning("Invalid input: %s", err)
    return jsonify({"error": str(err)}), 400


@app.errorhandler(ConcurrentPlaybackRejected)
def handle_concurrent(err):
    logger.warning("Rejected request: %s", err)
    return jsonify({"error": str(err)}), 409


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    array = get_array()
    state = get_state()
    algo  = resolve_algorithm(state["selected_algo"])
    stepper = current_stepper()

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_bars(array),
        playback=playback_controls(
            is_playing=stepper.is_playing if stepper else False,
            current_frame=stepper.current_idx if stepper else 0,
            total_frames=stepper.total_frames if stepper else 0,
            speed=state["speed"],
            has_array=bool(array),
            is_sorted=state["sorted"],
        ),
        algo_selector=algorithm_selector(list_algorithms(), algo.key),
        algo_info=algorithm_info(algo),
        array_controls=array_controls(
            size=state["size"],
            min_size=settings.min_size,
            max_size=settings.max_size,
            custom_text=state["custom_text"],
        ),
        analytics=analytics_panel(),
        comparison=comparison_panel(algorithms=list_algorithms()),
        pseudocode=pseudocode_viewer(algo.pseudocode, algo_label=algo.label),
        legend=legend(),
        status=status_line(
            is_playing=stepper.is_playing if stepper else False,
            is_sorted=state["sorted"],
        ),
        is_sorted=state["sorted"],
    )
    return html


# ---------------------------------------------------------------------------
# API: Array
# ---------------------------------------------------------------------------
@app.route("/api/array/random", methods=["POST"])
def api_array_random():
    ensure_idle()
    data = request.get_json(silent=True) or {}
    size = clamp(data.get("size", get_state()["size"]), settings.min_size, settings.max_size)

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise InvalidInput(f"Seed must be an integer, got {seed!r}")

    array = random_sequence(size, settings.value_low, settings.value_high, seed=seed)
    drop_run()
    set_state(array=array, size=size, sorted=False)
    logger.debug("New random array of %d values", size)
    return jsonify({"svg": render_bars(array), "array": array, "size": size, "is_sorted": False})


@app.route("/api/array/custom", methods=["POST"])
def api_array_custom():
    ensure_idle()
    data = request.get_json(silent=True) or {}
    text = data.get("text", "")

    array = parse_custom_input(text, limit=settings.max_custom)
    drop_run()
    set_state(array=array, custom_text=", ".join(str(v) for v in array), sorted=False)
    logger.debug("Custom array of %d values", len(array))
    return jsonify({"svg": render_bars(array), "array": array, "is_sorted": False})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    ensure_idle()
    data = request.get_json(silent=True) or {}
    algo = resolve_algorithm(data.get("algo_key"))
    set_state(selected_algo=algo.key)

    return jsonify({
        "algo_key":   algo.key,
        "algo_info":  algorithm_info(algo),
        "pseudocode": pseudocode_viewer(algo.pseudocode, algo_label=algo.label),
    })


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = request.get_json(silent=True) or {}
    speed = clamp(data.get("speed", settings.default_speed), 1, 100)
    set_state(speed=speed)

    stepper = current_stepper()
    if stepper is not None:
        stepper.set_speed_value(speed)
    return jsonify({"speed": speed, "delay_ms": speed_to_delay_ms(speed)})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    ensure_idle()
    array = get_array()
    state = get_state()
    if state["sorted"]:
        raise InvalidInput("Array is already sorted; generate a new array first")

    rec = Recorder()
    rec.start(state["selected_algo"], array)
    rec.run_to_completion()

    stepper = rec.stepper()
    stepper.set_speed_value(state["speed"])
    stepper.play()
    run_id = store_run(rec, stepper)

    payload = frame_payload(stepper)
    payload.update({
        "run_id":    run_id,
        "delay_ms":  stepper.delay_ms,
        "events":    [e.to_dict() for e in rec.trace],
        "metrics":   rec.metrics.__dict__,
        "analytics": analytics_panel(rec.metrics),
    })
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
def _require_stepper():
    stepper = current_stepper()
    if stepper is None:
        return None, (jsonify({"error": "No active run; sort first"}), 400)
    return stepper, None


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    stepper, err = _require_stepper()
    if err:
        return err
    if not stepper.next_step():
        return jsonify({"error": "Already at last step", **frame_payload(stepper)}), 400
    record_finish(stepper)
    return jsonify(frame_payload(stepper))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    stepper, err = _require_stepper()
    if err:
        return err
    stepper.pause()
    if not stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(frame_payload(stepper))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    stepper, err = _require_stepper()
    if err:
        return err
    data = request.get_json(silent=True) or {}
    idx = data.get("index", 0)
    if not isinstance(idx, int) or not stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    record_finish(stepper)
    return jsonify(frame_payload(stepper))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    stepper, err = _require_stepper()
    if err:
        return err
    stepper.jump_to_end()
    record_finish(stepper)
    return jsonify(frame_payload(stepper))


@app.route("/api/step/stop", methods=["POST"])
def api_step_stop():
    stepper = current_stepper()
    if stepper is not None:
        stepper.pause()
    return jsonify({"is_playing": False})


@app.route("/api/state", methods=["GET"])
def api_state():
    state = get_state()
    stepper = current_stepper()
    state.update({
        "array":        get_array(),
        "delay_ms":     speed_to_delay_ms(state["speed"]),
        "is_playing":   stepper.is_playing if stepper else False,
        "is_finished":  stepper.is_finished if stepper else False,
        "current_step": stepper.current_idx if stepper else 0,
        "total_steps":  stepper.total_frames if stepper else 0,
    })
    return jsonify(state)


@app.route("/api/export", methods=["GET"])
def api_export():
    run = current_run()
    if run is None:
        return jsonify({"error": "No active run; sort first"}), 400
    return jsonify(run["recorder"].export())


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data  = request.get_json(silent=True) or {}
    array = get_array()

    left, right = Recorder(), Recorder()
    left.start(data.get("left"), array)
    right.start(data.get("right"), array)
    left.run_to_completion()
    right.run_to_completion()

    result = compare(left, right)
    return jsonify({
        "comparison": comparison_panel(result),
        "left":       result.left.__dict__,
        "right":      result.right.__dict__,
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: center;
      gap: 12px;
      border-bottom: 1px solid var(--border);
    }

    #canvas-svg svg rect, #canvas-svg svg text { transition: all 0.3s ease-in-out; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 340px;
      overflow: auto;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }
    .panel h3 { font-size: 13px; font-weight: 700; margin-bottom: 14px; }
    .button-row { display: flex; gap: 8px; margin: 8px 0; }
    button, select, input[type=text] {
      background: var(--bg-darker);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 6px 10px;
    }
    button:disabled { opacity: 0.4; }
    .btn-primary { background: var(--accent-cyan); border-color: var(--accent-cyan); }
    input[type=range] { width: 100%; }
    .placeholder, .algo-info { color: var(--text-secondary); font-size: 13px; line-height: 1.6; }
    .error { color: var(--accent-rose); font-size: 12px; min-height: 16px; }
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 13px; line-height: 1.6; }
    .code-line { white-space: pre; }
    .legend { display: flex; gap: 16px; font-size: 13px; }
    .legend i { display: inline-block; width: 12px; height: 12px; margin-right: 6px; }
    .status { color: var(--text-secondary); font-size: 13px; }
    table { width: 100%; font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-panel">{{ algo_selector|safe }}</div>
    {{ array_controls|safe }}
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
      {{ legend|safe }}
      {{ status|safe }}
    </div>

    <div id="bottom-panel">
      <div>
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div>
        <h3>Algorithm Information</h3>
        <div id="algo-info">{{ algo_info|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let timer = null;
    let delayMs = 500;
    let sorted = {{ 'true' if is_sorted else 'false' }};
    let swapPending = false;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function show(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.current_step !== undefined) document.getElementById('current-step').textContent = data.current_step;
      if (data.total_steps !== undefined) document.getElementById('total-steps').textContent = data.total_steps;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.is_sorted !== undefined) sorted = data.is_sorted;
      if (timer === null) document.getElementById('btn-sort').disabled = sorted;
    }

    function setStatus(text) { document.getElementById('status').textContent = text; }

    function setBusy(busy) {
      document.getElementById('btn-sort').disabled = busy || sorted;
      document.getElementById('btn-stop').disabled = !busy;
      ['btn-random', 'btn-set-custom', 'size-slider', 'custom-input', 'algo-selector']
        .forEach(id => { const el = document.getElementById(id); if (el) el.disabled = busy; });
    }

    function stopTimer() {
      if (timer) { clearTimeout(timer); timer = null; }
    }

    async function tick() {
      const data = await post('/api/step/next');
      if (timer === null) return;  // stopped while the request was in flight
      show(data);
      if (data.error || data.is_finished) {
        stopTimer();
        setBusy(false);
        setStatus('Array sorted!');
        return;
      }
      // a swap is highlighted for 40% of the delay, then applied
      let wait = delayMs;
      if (data.frame && data.frame.swap_pending) wait = 0.4 * delayMs;
      else if (swapPending) wait = 0.6 * delayMs;
      swapPending = Boolean(data.frame && data.frame.swap_pending);
      timer = setTimeout(tick, wait);
    }

    document.getElementById('btn-sort').addEventListener('click', async () => {
      const data = await post('/api/run');
      if (data.error) { setStatus(data.error); return; }
      show(data);
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      delayMs = data.delay_ms;
      swapPending = false;
      setBusy(true);
      setStatus('Sorting in progress...');
      timer = setTimeout(tick, delayMs);
    });

    document.getElementById('btn-stop').addEventListener('click', async () => {
      stopTimer();
      await post('/api/step/stop');
      setBusy(false);
      setStatus('Stopped');
    });

    document.getElementById('btn-next').addEventListener('click', async () => show(await post('/api/step/next')));
    document.getElementById('btn-prev').addEventListener('click', async () => show(await post('/api/step/prev')));
    document.getElementById('btn-rewind').addEventListener('click', async () => show(await post('/api/step/goto', {index: 0})));
    document.getElementById('btn-end').addEventListener('click', async () => show(await post('/api/step/end')));

    document.getElementById('btn-random').addEventListener('click', async () => {
      const data = await post('/api/array/random', {size: +document.getElementById('size-slider').value});
      document.getElementById('array-error').textContent = data.error || '';
      show(data);
      setStatus('Ready to sort');
    });

    document.getElementById('size-slider').addEventListener('change', async (e) => {
      document.getElementById('size-val').textContent = e.target.value;
      const data = await post('/api/array/random', {size: +e.target.value});
      show(data);
    });

    document.getElementById('btn-set-custom').addEventListener('click', async () => {
      const data = await post('/api/array/custom', {text: document.getElementById('custom-input').value});
      document.getElementById('array-error').textContent = data.error || '';
      show(data);
      setStatus('Ready to sort');
    });

    document.getElementById('speed-slider').addEventListener('input', async (e) => {
      document.getElementById('speed-val').textContent = e.target.value;
      const data = await post('/api/config/speed', {speed: +e.target.value});
      if (data.delay_ms) delayMs = data.delay_ms;
    });

    document.getElementById('algo-selector').addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.algo_info) document.getElementById('algo-info').innerHTML = data.algo_info;
    });

    document.getElementById('btn-compare').addEventListener('click', async () => {
      const data = await post('/api/compare', {
        left: document.getElementById('compare-left').value,
        right: document.getElementById('compare-right').value,
      });
      if (data.comparison) document.getElementById('comparison').innerHTML = data.comparison;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Sorting Visualizer listening on http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False)
