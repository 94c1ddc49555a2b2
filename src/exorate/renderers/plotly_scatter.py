"""Plotly scatter of the visible planets: radius against equilibrium temperature."""

import plotly.graph_objects as go

from exorate.catalog import EARTH_RADIUS, EARTH_TEMP
from exorate.models import CelestialRecord

_BG = "#050a1a"
_GRID = "#1c2a48"
_EARTH_COLOR = "#7ec8e3"


def render_catalog_scatter(records: list[CelestialRecord]) -> go.Figure:
    """Render records as an interactive radius/temperature scatter.

    Marker colour encodes ESI; Earth is marked for reference. Hovering a
    point shows the planet name and its values.

    Args:
        records: Planets currently on screen, in display order.

    Returns:
        Plotly Figure object.
    """
    planet_trace = go.Scatter(
        x=[r.radius for r in records],
        y=[r.equilibrium_temp for r in records],
        mode="markers",
        marker=dict(
            size=10,
            color=[r.similarity_score for r in records],
            colorscale="Viridis",
            cmin=0.0,
            cmax=1.0,
            colorbar=dict(title="ESI"),
            line=dict(width=0),
        ),
        text=[r.name for r in records],
        hovertemplate=(
            "<b>%{text}</b><br>Radius %{x:.2f} R⊕<br>"
            "Temp %{y:.1f} K<br>ESI %{marker.color:.3f}<extra></extra>"
        ),
        name="planets",
    )

    earth_trace = go.Scatter(
        x=[EARTH_RADIUS],
        y=[EARTH_TEMP],
        mode="markers+text",
        marker=dict(size=12, color=_EARTH_COLOR, symbol="star"),
        text=["Earth"],
        textposition="top center",
        textfont=dict(color=_EARTH_COLOR),
        hoverinfo="skip",
        name="earth",
    )

    fig = go.Figure(data=[planet_trace, earth_trace])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        font=dict(color="#e8e8e8"),
        showlegend=False,
        margin=dict(l=40, r=10, t=10, b=40),
        height=360,
        xaxis=dict(title="Radius (R⊕)", gridcolor=_GRID, zeroline=False),
        yaxis=dict(title="Equilibrium temperature (K)", gridcolor=_GRID, zeroline=False),
    )
    return fig
