# render.py
#
# Stateless Plotly renderers. Every figure is a pure function of the step
# record (or trace) passed in.

from typing import Dict, Optional, Sequence

import plotly.graph_objects as go

from engine import Action, ReplacementPolicy, StepRecord
from utils import (COLOR_ACCENT, COLOR_BG, COLOR_FAULT, COLOR_FRAME, COLOR_HIT,
                   COLOR_MUTED, COLOR_TEXT_PRIMARY, COLOR_WARNING, action_color)


def _frame_label(frame_no: int, page, record: Optional[StepRecord], policy: str) -> str:
    label = f"F{frame_no}: " + (f"P{page}" if page is not None else "Free")
    if record is None or page is None:
        return label
    if policy == ReplacementPolicy.CLOCK and record.ref_bits is not None:
        label += f"<br>R:{record.ref_bits[frame_no]}"
    elif policy == ReplacementPolicy.LRU and record.lru_ages is not None:
        label += f"<br>AGE:{record.lru_ages[frame_no]}"
    return label


def build_frame_figure(record: Optional[StepRecord], policy: str, frame_count: int) -> go.Figure:
    """
    Draw the memory frames for one step.

    Args:
        record: Step to draw, None for the empty initial state
        policy: Policy name, selects the auxiliary annotations
        frame_count: Number of frames to draw when no record is given

    Returns:
        go.Figure: One bar per frame
    """
    frame_state = record.frame_state if record is not None else (None,) * frame_count

    x = []
    text = []
    colors = []
    outlines = []
    widths = []

    for i, page in enumerate(frame_state):
        x.append(i)
        text.append(_frame_label(i, page, record, policy))
        colors.append(COLOR_FRAME if page is not None else COLOR_BG)

        if record is not None and record.replaced_frame_index == i and record.action == Action.REPLACEMENT:
            outlines.append(COLOR_FAULT)
            widths.append(4)
        elif record is not None and record.action == Action.HIT and page == record.reference:
            outlines.append(COLOR_HIT)
            widths.append(4)
        else:
            outlines.append(COLOR_ACCENT)
            widths.append(2)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=[1] * len(x),
        text=text,
        textposition="inside",
        insidetextanchor="middle",
        textfont=dict(color=COLOR_ACCENT, size=18),
        marker=dict(color=colors, line=dict(color=outlines, width=widths)),
        hovertext=text,
        hoverinfo="text",
    ))

    has_pointer = policy in (ReplacementPolicy.FIFO, ReplacementPolicy.CLOCK)
    if record is not None and has_pointer and record.pointer is not None:
        fig.add_annotation(
            x=record.pointer,
            y=0,
            text="POINTER",
            showarrow=True,
            arrowhead=2,
            arrowcolor=COLOR_ACCENT,
            ax=0,
            ay=35,
            font=dict(color=COLOR_ACCENT),
        )

    fig.update_layout(
        height=220,
        showlegend=False,
        plot_bgcolor=COLOR_BG,
        paper_bgcolor=COLOR_BG,
        font=dict(color=COLOR_TEXT_PRIMARY),
        xaxis=dict(tickmode="array", tickvals=x, ticktext=[f"F{i}" for i in x]),
        yaxis=dict(showticklabels=False, showgrid=False, range=[-0.35, 1]),
        margin=dict(t=20, b=40),
    )
    return fig


def build_reference_figure(trace: Sequence[StepRecord], active_index: int) -> go.Figure:
    """Draw the reference string, coloring replayed steps by their outcome."""
    colors = []
    for i, record in enumerate(trace):
        if i < active_index:
            colors.append(action_color(record.action))
        elif i == active_index:
            colors.append(COLOR_ACCENT)
        else:
            colors.append(COLOR_MUTED)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=list(range(len(trace))),
        y=[1] * len(trace),
        text=[str(record.reference) for record in trace],
        textposition="inside",
        insidetextanchor="middle",
        marker_color=colors,
        hoverinfo="text",
        hovertext=[f"#{r.ref_index}: {r.reference}" for r in trace],
    ))
    fig.update_layout(
        height=90,
        showlegend=False,
        plot_bgcolor=COLOR_BG,
        paper_bgcolor=COLOR_BG,
        font=dict(color=COLOR_TEXT_PRIMARY),
        xaxis=dict(showticklabels=False),
        yaxis=dict(showticklabels=False, showgrid=False),
        margin=dict(t=5, b=5),
    )
    return fig


def build_stats_figure(stats: Dict[str, float]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[stats["hits"], stats["faults"]],
        marker_color=[COLOR_HIT, COLOR_FAULT],
    ))
    fig.update_layout(
        height=300,
        title="Hits vs Faults",
        plot_bgcolor=COLOR_BG,
        paper_bgcolor=COLOR_BG,
        font=dict(color=COLOR_WARNING),
    )
    return fig
