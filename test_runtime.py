import pytest

from nodes import Column, Text, texts
from runtime import Composer, MutableState, component, remember, remember_saveable
from saved_state import SavedStateRegistry


def _leaf(label, calls, handles):
    calls.append(label)
    count = remember(lambda: MutableState(0))
    handles[label] = count
    return Text(f"{label}:{count.value}")


def _pair(labels, calls, handles):
    return Column(tuple(component(label, _leaf, label, calls, handles) for label in labels))


def _compose(labels=("a", "b")):
    calls, handles = [], {}
    composer = Composer()
    node = composer.compose(_pair, list(labels), calls, handles)
    return composer, node, calls, handles


def test_remember_keeps_state_across_passes():
    composer, _, _, handles = _compose()
    first = handles["a"]
    handles["a"].value = 1
    composer.recompose()
    assert handles["a"] is first


def test_state_write_invalidates_reader_and_recompose_shows_value():
    composer, node, _, handles = _compose()
    assert texts(node) == ["a:0", "b:0"]
    assert not composer.needs_recompose

    handles["b"].value = 5
    assert composer.needs_recompose
    node = composer.recompose()
    assert texts(node) == ["a:0", "b:5"]
    assert not composer.needs_recompose


def test_equal_write_does_not_invalidate():
    composer, _, _, handles = _compose()
    handles["a"].value = 0
    assert not composer.needs_recompose


def test_untouched_siblings_are_skipped():
    composer, _, calls, handles = _compose()
    assert (composer.passes, composer.executions) == (1, 3)
    calls.clear()
    handles["a"].value = 3
    composer.recompose()
    assert calls == ["a"]
    # the list and "a" re-run, "b" is reused
    assert (composer.passes, composer.executions) == (2, 5)


def test_recompose_without_changes_executes_nothing_below_root():
    composer, _, calls, _ = _compose()
    calls.clear()
    composer.recompose()
    assert calls == []
    assert (composer.passes, composer.executions) == (2, 3)


def test_reading_outside_composition_does_not_subscribe():
    state = MutableState(1)
    assert state.value == 1
    state.value = 2
    assert state.peek() == 2


def test_unvisited_instances_are_disposed_and_state_resets():
    calls, handles = [], {}
    labels = MutableState(("a", "b"))

    def root():
        return _pair(list(labels.value), calls, handles)

    composer = Composer()
    composer.compose(root)
    handles["b"].value = 9
    composer.recompose()
    assert len(composer.instances_of(_leaf)) == 2

    labels.value = ("a",)
    composer.recompose()
    assert len(composer.instances_of(_leaf)) == 1

    labels.value = ("a", "b")
    node = composer.recompose()
    assert texts(node) == ["a:0", "b:0"]


def test_duplicate_keys_are_rejected():
    def root():
        return Column((component("x", Text, "1"), component("x", Text, "2")))

    with pytest.raises(ValueError):
        Composer().compose(root)


def test_remember_outside_component_raises():
    with pytest.raises(RuntimeError):
        remember(lambda: 1)


def test_remember_saveable_restores_and_snapshots():
    handles = {}

    def root():
        flag = remember_saveable("flag", True)
        handles["flag"] = flag
        return Text(str(flag.value))

    registry = SavedStateRegistry({"flag": False})
    composer = Composer(saved_state=registry)
    node = composer.compose(root)
    assert node == Text("False")

    handles["flag"].value = True
    assert registry.snapshot() == {"flag": True}

    composer.dispose()
    assert registry.snapshot() == {}


def test_remember_saveable_survives_recreation_but_remember_does_not():
    handles = {}

    def root():
        saved = remember_saveable("saved", 0)
        plain = remember(lambda: MutableState(0))
        handles["saved"], handles["plain"] = saved, plain
        return Text(f"{saved.value}/{plain.value}")

    registry = SavedStateRegistry()
    composer = Composer(saved_state=registry)
    composer.compose(root)
    handles["saved"].value = 4
    handles["plain"].value = 7

    carried = SavedStateRegistry(registry.snapshot())
    composer.dispose()
    node = Composer(saved_state=carried).compose(root)
    assert node == Text("4/0")


def test_dispose_calls_slot_dispose():
    disposed = []

    class Resource:
        def dispose(self):
            disposed.append(True)

    def root():
        remember(Resource)
        return Text("r")

    composer = Composer()
    composer.compose(root)
    composer.dispose()
    assert disposed == [True]
