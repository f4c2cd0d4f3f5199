import json

import pytest

from neoimpact import simulate_impact, ImpactScenarioInput
from neoimpact.io import (
    flatten_neo_feed,
    load_asteroids,
    load_json,
    load_neo_feed,
    serialize_analyses,
    write_analyses,
)
from neoimpact.tests.test_asteroids import sbdb_payload
from neoimpact.tests.test_scenario import NEO_RECORD


def _feed():
    second = dict(NEO_RECORD, name="(2020 AB)", id="1")
    third = dict(NEO_RECORD, name="(2021 CD)", id="2")
    return {
        "element_count": 3,
        "near_earth_objects": {
            "2015-09-08": [second, third],
            "2015-09-07": [NEO_RECORD],
        },
    }


def test_flatten_feed_in_date_order():
    neos = flatten_neo_feed(_feed())
    assert [neo["name"] for neo in neos] == ["(2015 KT120)", "(2020 AB)", "(2021 CD)"]


def test_flatten_feed_requires_mapping():
    with pytest.raises(ValueError):
        flatten_neo_feed({"near_earth_objects": []})


def test_load_neo_feed_accepts_feed_or_list(tmp_path):
    feed_path = tmp_path / "feed.json"
    feed_path.write_text(json.dumps(_feed()))
    list_path = tmp_path / "list.json"
    list_path.write_text(json.dumps([NEO_RECORD]))

    assert len(load_neo_feed(feed_path)) == 3
    assert load_neo_feed(list_path)[0]["name"] == "(2015 KT120)"


def test_load_empty_feed(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"near_earth_objects": {}}))
    with pytest.raises(ValueError):
        load_neo_feed(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(tmp_path / "nope.json")


def test_load_asteroids_single_and_list(tmp_path):
    single = tmp_path / "eros.json"
    single.write_text(json.dumps(sbdb_payload()))
    many = tmp_path / "many.json"
    many.write_text(json.dumps([sbdb_payload(), sbdb_payload(fullname="Other", a="2.7")]))

    assert [a.name for a in load_asteroids(single)] == ["433 Eros (A898 PA)"]
    asteroids = load_asteroids(many)
    assert len(asteroids) == 2
    assert asteroids[1].orbit_class() == "outer"


def test_write_analyses(tmp_path):
    crater = simulate_impact(ImpactScenarioInput.from_neo(NEO_RECORD))
    airburst = simulate_impact(ImpactScenarioInput(diameter_min=4.0, diameter_max=6.0, velocity=20.0,
                                                   name="small"))
    out = tmp_path / "results" / "analyses.json"

    write_analyses(out, [crater, airburst], density=2.5, angle=45.0, distance=200.0)

    payload = json.loads(out.read_text())
    assert "generated_at" in payload
    assert payload["scenario"] == {"density_g_cm3": 2.5, "impact_angle_deg": 45.0, "distance_km": 200.0}
    assert len(payload["analyses"]) == 2
    assert payload["analyses"][0]["crater"]["type"] == "Simple"
    assert payload["analyses"][1]["severity"] == "Airburst"
    assert payload["analyses"][1]["crater"] is None
    assert payload["analyses"][1]["thermal_effects"] is None


def test_serialize_matches_model_dump():
    analysis = simulate_impact(ImpactScenarioInput.from_neo(NEO_RECORD))
    assert serialize_analyses([analysis]) == [analysis.model_dump(mode="json")]
