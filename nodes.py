from dataclasses import dataclass, field
from typing import Any, Callable, Tuple

# text styles
BODY = "body"
HEADLINE = "headline"

# container styles
PRIMARY = "primary"


@dataclass(frozen=True)
class Padding:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def symmetric(cls, vertical: int = 0, horizontal: int = 0):
        return cls(vertical, horizontal, vertical, horizontal)

    @classmethod
    def all(cls, value: int):
        return cls(value, value, value, value)

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


NO_PADDING = Padding()


@dataclass(frozen=True)
class Text:
    text: str
    style: str = BODY


@dataclass(frozen=True)
class Button:
    key: Any
    label: str
    on_click: Callable[[], None] = field(compare=False)


@dataclass(frozen=True)
class IconButton:
    key: Any
    glyph: str
    description: str
    on_click: Callable[[], None] = field(compare=False)


@dataclass(frozen=True)
class Column:
    children: Tuple[Any, ...]
    padding: Padding = NO_PADDING
    center: bool = False
    fill: bool = False


@dataclass(frozen=True)
class Row:
    # the first child takes whatever width the others leave
    children: Tuple[Any, ...]
    padding: Padding = NO_PADDING
    gap: int = 1


@dataclass(frozen=True)
class Card:
    child: Any
    margin: Padding = NO_PADDING
    style: str = PRIMARY


@dataclass(frozen=True)
class Clip:
    child: Any
    height: int


@dataclass(frozen=True)
class Surface:
    child: Any
    padding: Padding = NO_PADDING


@dataclass(frozen=True)
class LazyColumn:
    state: Any = field(compare=False)
    children: Tuple[Any, ...]
    first_index: int
    skip_rows: int
    total: int
    padding: Padding = NO_PADDING


def is_actionable(node) -> bool:
    return isinstance(node, (Button, IconButton))


def walk(node):
    """Yield every node in the tree, depth first."""
    yield node
    child = getattr(node, "child", None)
    if child is not None:
        yield from walk(child)
    for c in getattr(node, "children", ()) or ():
        yield from walk(c)


def find_all(node, node_type):
    return [n for n in walk(node) if isinstance(n, node_type)]


def texts(node) -> list:
    return [n.text for n in walk(node) if isinstance(n, Text)]

