from exorate.models import CelestialRecord
from exorate.renderers.plotly_scatter import render_catalog_scatter


def _planet(name, radius, temp, score):
    return CelestialRecord(
        name=name,
        radius=radius,
        equilibrium_temp=temp,
        host_star_temp=5000.0,
        similarity_score=score,
    )


def test_scatter_plots_each_planet_and_earth():
    records = [_planet("Kepler-22 b", 2.1, 262.0, 0.85), _planet("TRAPPIST-1 e", 0.92, 250.0, 0.9)]

    fig = render_catalog_scatter(records)

    planets, earth = fig.data
    assert list(planets.x) == [2.1, 0.92]
    assert list(planets.y) == [262.0, 250.0]
    assert list(planets.text) == ["Kepler-22 b", "TRAPPIST-1 e"]
    assert list(planets.marker.color) == [0.85, 0.9]
    assert list(earth.x) == [1.0] and list(earth.y) == [288.0]


def test_scatter_with_no_planets_still_marks_earth():
    fig = render_catalog_scatter([])
    assert len(fig.data[0].x) == 0
    assert list(fig.data[1].text) == ["Earth"]
