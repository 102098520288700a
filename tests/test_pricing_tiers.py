import pytest
from jsonschema import ValidationError

from catering.estimates.pricing_tiers import get_tier, load_pricing_tiers, parse_pricing_tiers


def test_bundled_tiers_load():
    tiers = load_pricing_tiers()
    assert [t.id for t in tiers] == ["essential", "classic", "premium", "signature"]
    assert get_tier("classic").per_guest_rate == 3500


def test_unknown_tier():
    with pytest.raises(KeyError):
        get_tier("platinum")


def test_schema_rejects_float_rates():
    with pytest.raises(ValidationError):
        parse_pricing_tiers({"version": "v1", "tiers": [{"id": "x", "label": "X", "per_guest_rate": 12.5}]})


def test_duplicate_ids_rejected():
    raw = {
        "version": "v1",
        "tiers": [
            {"id": "a", "label": "A", "per_guest_rate": 100},
            {"id": "a", "label": "A again", "per_guest_rate": 200},
        ],
    }
    with pytest.raises(ValueError):
        parse_pricing_tiers(raw)


def test_custom_tiers_file(tmp_path):
    path = tmp_path / "tiers.yaml"
    path.write_text("version: v2\ntiers:\n  - id: lunch\n    label: Lunch\n    per_guest_rate: 1800\n")
    tiers = load_pricing_tiers(str(path))
    assert len(tiers) == 1
    assert tiers[0].label == "Lunch"


def test_missing_tiers_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pricing_tiers(str(tmp_path / "nope.yaml"))
