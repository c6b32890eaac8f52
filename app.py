"""
Page Replacement Visualizer — FIFO, LRU, Optimal & Clock

This application replays the step-by-step behavior of four classical page
replacement algorithms over a user supplied page reference string:
    - FIFO:    evict the page loaded earliest
    - LRU:     evict the page unused for the longest time
    - Optimal: evict the page whose next use is furthest in the future
    - Clock:   second-chance eviction with reference bits

The whole trace is generated up front by the engine, so the controls only
move a cursor over it (forward, backward, play/pause).

Built with Streamlit for the web interface and Plotly for visualizations.
Run with:  streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                   # For pacing auto-play

import streamlit as st                        # Web application framework

from engine import Action, ReplacementPolicy, generate_trace
from render import build_frame_figure, build_reference_figure, build_stats_figure
from replay import ReplayController
from utils import (DEFAULT_FRAMES, DEFAULT_REFERENCES, MAX_FRAMES, MIN_FRAMES,
                   SPEED_DEFAULT, SPEED_MAX, SPEED_MIN, action_label,
                   parse_reference_string, validate_frame_count)


# Configure the Streamlit page
st.set_page_config(page_title="Page Replacement Visualizer", layout="wide")

st.title("Page Replacement Visualizer — FIFO, LRU, Optimal & Clock")

# -----------------------------------------------------------------------------
# SESSION STATE - Replay Controller Persistence
# -----------------------------------------------------------------------------

# The controller survives Streamlit reruns; each browser session gets its own
if "controller" not in st.session_state:
    st.session_state.controller = ReplayController()
    st.session_state.frame_count = DEFAULT_FRAMES

controller: ReplayController = st.session_state.controller

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

ref_string_raw = st.sidebar.text_area(
    "Page reference string (space or comma separated)",
    value=DEFAULT_REFERENCES,
)

frame_count_input = st.sidebar.number_input(
    "Frame count",
    min_value=MIN_FRAMES,
    max_value=MAX_FRAMES,
    value=DEFAULT_FRAMES,
    step=1,
)

policy = st.sidebar.selectbox("Replacement Policy", options=list(ReplacementPolicy.ALL))

speed = st.sidebar.slider(
    "Playback speed",
    min_value=SPEED_MIN,
    max_value=SPEED_MAX,
    value=SPEED_DEFAULT,
    step=100,
)
controller.set_speed(speed)
st.sidebar.caption(f"Step delay: {controller.speed_ms} ms")

if st.sidebar.button("Run Simulation"):
    try:
        references = parse_reference_string(ref_string_raw)
        frame_count = validate_frame_count(frame_count_input)
        trace = generate_trace(policy, references, frame_count)
        controller.load(trace, policy)
        st.session_state.frame_count = frame_count
        st.sidebar.success(controller.status)
    except ValueError as e:
        st.sidebar.error(str(e))

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    back_col, play_col, fwd_col = st.columns(3)
    if back_col.button("◀ Step", disabled=not controller.can_step_back):
        controller.step(-1)
        st.rerun()
    play_label = "PAUSE" if controller.playing else "PLAY"
    if play_col.button(play_label, disabled=not (controller.can_play or controller.playing)):
        controller.toggle()
        st.rerun()
    if fwd_col.button("Step ▶", disabled=not controller.can_step_forward):
        controller.step(1)
        st.rerun()

    st.info(controller.status)

    # Display event log (most recent 20 events, newest first)
    st.subheader("Event Log")
    for ev in controller.event_log()[-20:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    record = controller.current_record
    shown_policy = controller.policy or policy

    st.subheader("Current Reference")
    if record is None:
        st.write("No step replayed yet")
    else:
        message = f"REF {record.reference}: {action_label(record.action)}"
        if record.action == Action.HIT:
            st.success(message)
        else:
            st.error(message)

    st.subheader("Memory Frames")
    frame_fig = build_frame_figure(record, shown_policy, st.session_state.frame_count)
    st.plotly_chart(frame_fig, use_container_width=True)

    if controller.loaded:
        st.subheader("Reference String")
        st.plotly_chart(
            build_reference_figure(controller.trace, controller.current_step),
            use_container_width=True,
        )

    # ----- Statistics Display -----
    st.subheader("Statistics")
    stats = controller.stats()

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Step", f"{stats['current_step']} / {stats['total_refs']}")
    m2.metric("Hits", stats["hits"])
    m3.metric("Faults", stats["faults"])
    m4.metric("Hit Ratio", f"{stats['hit_ratio']:.2f}%")

    st.plotly_chart(build_stats_figure(stats), use_container_width=True)

    # ----- Export -----
    if controller.loaded:
        st.download_button(
            "Save frame view",
            data=frame_fig.to_html(include_plotlyjs="cdn"),
            file_name=f"{controller.export_name()}.html",
            mime="text/html",
        )
    else:
        st.caption("ERROR // NO_SIMULATION_DATA")

# =============================================================================
# AUTO-PLAY
# =============================================================================

# Advance one step per rerun while playing
if controller.playing:
    time.sleep(controller.speed_ms / 1000.0)
    controller.advance()
    st.rerun()
