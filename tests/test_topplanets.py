from exorate import topplanets
from exorate.catalog import CatalogFetchError
from exorate.models import CelestialRecord


def _planet(name, score):
    return CelestialRecord(
        name=name,
        radius=1.2,
        equilibrium_temp=280.0,
        host_star_temp=5500.0,
        similarity_score=score,
    )


def test_main_prints_top_planets(monkeypatch, capsys):
    records = (_planet("Low", 0.2), _planet("Best", 0.95), _planet("Good", 0.8))
    monkeypatch.setattr(topplanets, "load_catalog", lambda url, timeout: records)

    assert topplanets.main(["-n", "2"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Planet")
    assert [line.split()[0] for line in lines[2:]] == ["Best", "Good"]


def test_main_applies_min_esi(monkeypatch, capsys):
    records = (_planet("Low", 0.2), _planet("Best", 0.95))
    monkeypatch.setattr(topplanets, "load_catalog", lambda url, timeout: records)

    topplanets.main(["--min-esi", "0.5"])

    assert "Low" not in capsys.readouterr().out


def test_main_reports_fetch_failure(monkeypatch, capsys):
    def fail(url, timeout):
        raise CatalogFetchError("archive request failed")

    monkeypatch.setattr(topplanets, "load_catalog", fail)

    assert topplanets.main([]) == 1
    assert "archive request failed" in capsys.readouterr().out
