import pytest

from moselect.foundation.registry import Registry, normalize_key


def test_normalize_key_accepts_spaced_and_hyphenated_names():
    assert normalize_key("Crowding Distance") == "crowding_distance"
    assert normalize_key("max-min") == "max_min"
    assert normalize_key("  reference_point ") == "reference_point"


def test_register_and_get():
    reg = Registry("things")
    reg.register("alpha", 1)
    assert reg.get("alpha") == 1
    assert reg["ALPHA"] == 1
    assert "alpha" in reg
    assert 3 not in reg
    assert len(reg) == 1
    assert reg.name == "things"


def test_register_as_decorator():
    reg: Registry = Registry("funcs")

    @reg.register("niche count")
    def strategy():
        return "ok"

    assert reg.get("niche_count")() == "ok"
    assert list(reg) == ["niche_count"]


def test_duplicate_requires_override():
    reg = Registry("dups")
    reg.register("a", 1)
    with pytest.raises(ValueError, match="already exists"):
        reg.register("a", 2)
    reg.register("a", 2, override=True)
    assert reg.get("a") == 2


def test_missing_key_suggests_close_match():
    reg = Registry("mechanisms")
    reg.register("crowding_distance", object())
    with pytest.raises(KeyError, match="Did you mean 'crowding_distance'"):
        reg.get("crowding_distanse")
    assert reg.suggest("zzz") == []
    assert reg.list() == ["crowding_distance"]
