from __future__ import annotations

import plotly.graph_objects as go

from adboard.models import Curve
from adboard.overview import series_frame

# Chart colors
PLOT_BG = "rgba(0,0,0,0)"
GRID = "#eef2f7"
INK = "#0f172a"
MUTED = "#64748b"
SPEND = "#3b82f6"
ROI = "#10b981"
CARD = "#8884d8"


def fig_sparkline(series: Curve, window_minutes: int, now: int, color: str = CARD) -> go.Figure:
    """Axis-less line for a stats card, limited to the current window."""
    df = series_frame(series, window_minutes, now)
    fig = go.Figure(
        go.Scatter(
            x=df["time"],
            y=df["value"],
            mode="lines",
            line=dict(color=color, width=1.5),
            hovertemplate="%{x|%H:%M}<br>%{y:,.2f}<extra></extra>",
        )
    )
    fig.update_layout(
        height=70,
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor=PLOT_BG,
        plot_bgcolor=PLOT_BG,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        showlegend=False,
    )
    return fig


def fig_curve(
    series: Curve,
    window_minutes: int,
    now: int,
    title: str,
    color: str = SPEND,
    tickformat: str = ",.2f",
) -> go.Figure:
    """Full-size time chart of one material curve over the window."""
    df = series_frame(series, window_minutes, now)
    fig = go.Figure(
        go.Scatter(
            x=df["time"],
            y=df["value"],
            mode="lines",
            line=dict(color=color, width=2),
            fill="tozeroy",
            fillcolor="rgba(59, 130, 246, 0.08)" if color == SPEND else "rgba(16, 185, 129, 0.08)",
            hovertemplate="时间: %{x|%m-%d %H:%M}<br>%{y:" + tickformat + "}<extra></extra>",
        )
    )
    fig.update_layout(
        title=dict(text=title, font=dict(size=14, color=INK)),
        height=280,
        margin=dict(l=10, r=10, t=40, b=30),
        paper_bgcolor=PLOT_BG,
        plot_bgcolor=PLOT_BG,
        xaxis=dict(gridcolor=GRID, tickformat="%H:%M", tickfont=dict(color=MUTED)),
        yaxis=dict(gridcolor=GRID, tickformat=tickformat, title=""),
        showlegend=False,
    )
    if df.empty:
        fig.add_annotation(
            text="窗口内无数据", showarrow=False,
            xref="paper", yref="paper", x=0.5, y=0.5,
            font=dict(color=MUTED),
        )
    return fig
