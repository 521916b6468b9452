import json
import tempfile
from pathlib import Path

import pytest

from saved_state import SavedStateRegistry, SavedStateStore


def test_consume_returns_restored_value_once():
    registry = SavedStateRegistry({"flag": False})
    assert registry.has_restored("flag")
    assert registry.consume("flag") is False
    assert not registry.has_restored("flag")
    assert registry.consume("flag") is None
    assert registry.consume("flag", True) is True


def test_snapshot_merges_providers_and_unconsumed_values():
    registry = SavedStateRegistry({"other": 1})
    value = {"v": 3}
    registry.register("live", lambda: value["v"])
    value["v"] = 4
    assert registry.snapshot() == {"other": 1, "live": 4}

    registry.unregister("live")
    assert registry.snapshot() == {"other": 1}


def test_register_twice_is_an_error():
    registry = SavedStateRegistry()
    registry.register("k", lambda: 1)
    with pytest.raises(ValueError):
        registry.register("k", lambda: 2)


def test_store_round_trip():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "saved_state.json"
        store = SavedStateStore(str(path))
        assert store.load() == {}

        assert store.persist({"show_onboarding": False})
        assert json.loads(path.read_text()) == {"show_onboarding": False}
        assert store.load() == {"show_onboarding": False}


def test_store_discards_garbage():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "saved_state.json"
        path.write_text("[1, 2")
        assert SavedStateStore(str(path)).load() == {}
        path.write_text("[1, 2]")
        assert SavedStateStore(str(path)).load() == {}


def test_store_reports_unserializable_values():
    with tempfile.TemporaryDirectory() as tmp:
        store = SavedStateStore(str(Path(tmp) / "s.json"))
        assert store.persist({"bad": object()}) is False
