# ~/Apps/greetings/runtime.py
"""Minimal recomposition runtime.

Components are plain functions that return node trees. A ``Composer`` runs
them, tracks which ``MutableState`` cells each component instance read, and
rebuilds only when one of those cells changes. Instance identity is the
tuple of keys from the root down to the component call.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from saved_state import SavedStateRegistry

logger = logging.getLogger(__name__)

Path = Tuple[Any, ...]

_active: List["Composer"] = []
_CALLABLE = object()


def current_composer() -> "Composer":
    if not _active:
        raise RuntimeError("no composition is running")
    return _active[-1]


class MutableState:
    def __init__(self, value):
        self._value = value
        self._readers: Set[Tuple["Composer", Path]] = set()

    @property
    def value(self):
        if _active:
            composer = _active[-1]
            scope = composer.current_path
            if scope is not None:
                self._readers.add((composer, scope))
        return self._value

    @value.setter
    def value(self, new_value):
        if new_value == self._value:
            return
        self._value = new_value
        readers = self._readers
        self._readers = set()
        for composer, path in readers:
            composer.invalidate(path)

    def peek(self):
        """Read without subscribing the running component."""
        return self._value

    def __repr__(self):
        return f"MutableState({self._value!r})"


def mutable_state_of(value) -> MutableState:
    return MutableState(value)


class _Instance:
    __slots__ = ("path", "fn", "signature", "node", "slots", "cursor", "saved_keys")

    def __init__(self, path: Path, fn: Callable):
        self.path = path
        self.fn = fn
        self.signature = None
        self.node = None
        self.slots: List[Any] = []
        self.cursor = 0
        self.saved_keys: List[str] = []


def _signature(args, kwargs):
    # callbacks are treated as stable; they close over remembered state
    def norm(value):
        return _CALLABLE if callable(value) else value

    return (
        tuple(norm(a) for a in args),
        tuple((k, norm(kwargs[k])) for k in sorted(kwargs)),
    )


class Composer:
    def __init__(
        self,
        saved_state: Optional[SavedStateRegistry] = None,
        frame_clock=None,
        viewport: Tuple[int, int] = (24, 80),
    ):
        self.saved_state = saved_state if saved_state is not None else SavedStateRegistry()
        self.frame_clock = frame_clock
        self.viewport = viewport  # (rows, cols)

        self._instances: Dict[Path, _Instance] = {}
        self._invalid: Set[Path] = set()
        self._visited: Set[Path] = set()
        self._stack: List[Path] = []
        self._root: Optional[Callable] = None
        self._root_args: tuple = ()
        self._root_kwargs: dict = {}
        self.node = None
        self.passes = 0
        self.executions = 0

    # ---------------- scopes ----------------

    @property
    def current_path(self) -> Optional[Path]:
        return self._stack[-1] if self._stack else None

    def invalidate(self, path: Path) -> None:
        if path in self._instances:
            self._invalid.add(path)

    @property
    def needs_recompose(self) -> bool:
        return bool(self._invalid)

    def _has_invalid_within(self, path: Path) -> bool:
        n = len(path)
        return any(p[:n] == path for p in self._invalid)

    def _mark_subtree_visited(self, path: Path) -> None:
        n = len(path)
        for p in self._instances:
            if p[:n] == path:
                self._visited.add(p)

    # ---------------- passes ----------------

    def compose(self, root: Callable, *args, **kwargs):
        self._root = root
        self._root_args = args
        self._root_kwargs = kwargs
        return self._run_pass()

    def recompose(self):
        if self._root is None:
            raise RuntimeError("compose() has not been called")
        return self._run_pass()

    def _run_pass(self):
        self._visited = set()
        _active.append(self)
        try:
            node = self.component("root", self._root, *self._root_args, **self._root_kwargs)
        finally:
            _active.pop()
        self._invalid.clear()
        self._dispose_unvisited()
        self.passes += 1
        self.node = node
        return node

    def component(self, key, fn: Callable, *args, **kwargs):
        parent = self._stack[-1] if self._stack else ()
        path = parent + (key,)
        if path in self._visited:
            raise ValueError(f"duplicate component key {key!r} under {parent!r}")

        signature = _signature(args, kwargs)
        inst = self._instances.get(path)
        if (
            inst is not None
            and inst.fn is fn
            and inst.signature == signature
            and not self._has_invalid_within(path)
        ):
            self._mark_subtree_visited(path)
            return inst.node

        if inst is not None and inst.fn is not fn:
            self._dispose_subtree(path)
            inst = None
        if inst is None:
            inst = _Instance(path, fn)
            self._instances[path] = inst

        self._visited.add(path)
        self._invalid.discard(path)
        inst.signature = signature
        inst.cursor = 0
        self._stack.append(path)
        try:
            node = fn(*args, **kwargs)
        finally:
            self._stack.pop()
        inst.node = node
        self.executions += 1
        return node

    # ---------------- slots ----------------

    def _current_instance(self) -> _Instance:
        if not self._stack:
            raise RuntimeError("remember() must be called from a component")
        return self._instances[self._stack[-1]]

    def remember(self, factory: Callable[[], Any]):
        inst = self._current_instance()
        idx = inst.cursor
        inst.cursor += 1
        if idx < len(inst.slots):
            return inst.slots[idx]
        value = factory()
        inst.slots.append(value)
        return value

    def remember_saveable(self, key: str, initial) -> MutableState:
        inst = self._current_instance()

        def create():
            if self.saved_state.has_restored(key):
                state = MutableState(self.saved_state.consume(key))
            else:
                state = MutableState(initial)
            self.saved_state.register(key, state.peek)
            inst.saved_keys.append(key)
            return state

        return self.remember(create)

    # ---------------- disposal ----------------

    def _dispose_instance(self, path: Path) -> None:
        inst = self._instances.pop(path, None)
        if inst is None:
            return
        self._invalid.discard(path)
        for key in inst.saved_keys:
            self.saved_state.unregister(key)
        for slot in inst.slots:
            dispose = getattr(slot, "dispose", None)
            if callable(dispose):
                dispose()

    def _dispose_subtree(self, path: Path) -> None:
        n = len(path)
        for p in [p for p in self._instances if p[:n] == path]:
            self._dispose_instance(p)

    def _dispose_unvisited(self) -> None:
        stale = [p for p in self._instances if p not in self._visited]
        for p in stale:
            self._dispose_instance(p)
        if stale:
            logger.debug("Disposed %d component instance(s)", len(stale))

    def dispose(self) -> None:
        for p in list(self._instances):
            self._dispose_instance(p)
        self._invalid.clear()
        self.node = None

    # ---------------- introspection ----------------

    def instances_of(self, fn: Callable) -> List[Path]:
        return [p for p, inst in self._instances.items() if inst.fn is fn]


def component(key, fn: Callable, *args, **kwargs):
    return current_composer().component(key, fn, *args, **kwargs)


def remember(factory: Callable[[], Any]):
    return current_composer().remember(factory)


def remember_saveable(key: str, initial) -> MutableState:
    return current_composer().remember_saveable(key, initial)
