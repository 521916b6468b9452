import textwrap
from dataclasses import dataclass, field, replace
from typing import Any, Callable, FrozenSet, List, Optional

from nodes import (
    Button,
    Card,
    Clip,
    Column,
    IconButton,
    LazyColumn,
    Row,
    Surface,
    Text,
)

CONTROL = "control"


@dataclass(frozen=True)
class Span:
    x: int
    text: str
    style: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Target:
    key: Any
    on_click: Callable[[], None] = field(compare=False)
    row: int
    x: int
    width: int
    description: str


class Block:
    def __init__(self):
        self.lines: List[List[Span]] = []
        self.targets: List[Target] = []
        self.scrollables: list = []

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def content_width(self) -> int:
        widest = 0
        for line in self.lines:
            for span in line:
                widest = max(widest, span.x + len(span.text))
        return widest

    def pad_to(self, height: int):
        while len(self.lines) < height:
            self.lines.append([])

    def place(self, other: "Block", dx: int, dy: int, style: FrozenSet[str] = frozenset()):
        self.pad_to(dy + other.height)
        for i, line in enumerate(other.lines):
            self.lines[dy + i].extend(
                Span(s.x + dx, s.text, s.style | style) for s in line
            )
        for t in other.targets:
            self.targets.append(replace(t, row=t.row + dy, x=t.x + dx))
        self.scrollables.extend(other.scrollables)

    def crop(self, start: int, height: Optional[int] = None) -> "Block":
        end = None if height is None else start + height
        out = Block()
        out.lines = [list(line) for line in self.lines[start:end]]
        limit = len(self.lines) if end is None else end
        out.targets = [
            replace(t, row=t.row - start)
            for t in self.targets
            if start <= t.row < limit
        ]
        out.scrollables = list(self.scrollables)
        if height is not None:
            out.pad_to(height)
        return out


# ---------------- measuring ----------------


def wrap_text(text: str, width: int) -> List[str]:
    width = max(1, width)
    lines: List[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width) or [""])
    return lines


def intrinsic_width(node) -> int:
    if isinstance(node, Text):
        return max((len(line) for line in node.text.split("\n")), default=0)
    if isinstance(node, Button):
        return len(node.label) + 4
    if isinstance(node, IconButton):
        return len(node.glyph) + 2
    if isinstance(node, Column):
        inner = max((intrinsic_width(c) for c in node.children), default=0)
        return inner + node.padding.horizontal
    if isinstance(node, Row):
        inner = sum(intrinsic_width(c) for c in node.children)
        inner += node.gap * max(0, len(node.children) - 1)
        return inner + node.padding.horizontal
    if isinstance(node, Card):
        return intrinsic_width(node.child) + node.margin.horizontal
    if isinstance(node, (Clip, Surface)):
        return intrinsic_width(node.child)
    return 0


def measure(node, width: int) -> int:
    return layout(node, width).height


# ---------------- layout ----------------


def layout(node, width: int, height: Optional[int] = None) -> Block:
    width = max(1, width)
    if isinstance(node, Text):
        return _layout_text(node, width)
    if isinstance(node, (Button, IconButton)):
        return _layout_control(node, width)
    if isinstance(node, Column):
        return _layout_column(node, width, height)
    if isinstance(node, Row):
        return _layout_row(node, width)
    if isinstance(node, Card):
        return _layout_card(node, width)
    if isinstance(node, Clip):
        return _layout_clip(node, width)
    if isinstance(node, Surface):
        return _layout_surface(node, width, height)
    if isinstance(node, LazyColumn):
        return _layout_lazy_column(node, width, height)
    raise TypeError(f"cannot lay out {type(node).__name__}")


def _layout_text(node: Text, width: int) -> Block:
    block = Block()
    style = frozenset({node.style})
    for line in wrap_text(node.text, width):
        block.lines.append([Span(0, line, style)])
    return block


def _layout_control(node, width: int) -> Block:
    if isinstance(node, Button):
        text = f"[ {node.label} ]"
        description = node.label
    else:
        text = f"[{node.glyph}]"
        description = node.description
    text = text[:width]
    block = Block()
    block.lines.append([Span(0, text, frozenset({CONTROL}))])
    block.targets.append(
        Target(
            key=node.key,
            on_click=node.on_click,
            row=0,
            x=0,
            width=len(text),
            description=description,
        )
    )
    return block


def _layout_column(node: Column, width: int, height: Optional[int]) -> Block:
    pad = node.padding
    inner_w = max(1, width - pad.horizontal)
    children = [layout(child, inner_w) for child in node.children]
    content_h = sum(c.height for c in children)

    top = pad.top
    if node.fill and node.center and height is not None:
        top += max(0, (height - pad.vertical - content_h) // 2)

    block = Block()
    y = top
    for child in children:
        dx = pad.left
        if node.center:
            dx += max(0, (inner_w - child.content_width) // 2)
        block.place(child, dx, y)
        y += child.height
    block.pad_to(y + pad.bottom)
    if node.fill and height is not None:
        block.pad_to(height)
    return block


def _layout_row(node: Row, width: int) -> Block:
    pad = node.padding
    inner_w = max(1, width - pad.horizontal)
    children = list(node.children)
    if not children:
        block = Block()
        block.pad_to(pad.vertical)
        return block

    fixed = [intrinsic_width(c) for c in children[1:]]
    gaps = node.gap * (len(children) - 1)
    first_w = max(1, inner_w - sum(fixed) - gaps)
    widths = [first_w] + fixed

    block = Block()
    x = pad.left
    bottom = pad.top
    for child, w in zip(children, widths):
        child_block = layout(child, w)
        block.place(child_block, x, pad.top)
        bottom = max(bottom, pad.top + child_block.height)
        x += w + node.gap
    block.pad_to(bottom + pad.bottom)
    return block


def _layout_card(node: Card, width: int) -> Block:
    margin = node.margin
    inner_w = max(1, width - margin.horizontal)
    child = layout(node.child, inner_w)
    style = frozenset({node.style})

    block = Block()
    block.pad_to(margin.top)
    background = Block()
    for _ in range(child.height):
        background.lines.append([Span(0, " " * inner_w, style)])
    background.place(child, 0, 0, style)
    block.place(background, margin.left, margin.top)
    block.pad_to(margin.top + child.height + margin.bottom)
    return block


def _layout_clip(node: Clip, width: int) -> Block:
    height = max(0, node.height)
    return layout(node.child, width).crop(0, height)


def _layout_surface(node: Surface, width: int, height: Optional[int]) -> Block:
    pad = node.padding
    inner_h = None if height is None else max(0, height - pad.vertical)
    child = layout(node.child, max(1, width - pad.horizontal), inner_h)
    block = Block()
    block.place(child, pad.left, pad.top)
    block.pad_to(pad.top + child.height + pad.bottom)
    return block


def _layout_lazy_column(node: LazyColumn, width: int, height: Optional[int]) -> Block:
    pad = node.padding
    inner_w = max(1, width - pad.horizontal)
    stacked = Block()
    y = 0
    for child in node.children:
        child_block = layout(child, inner_w)
        stacked.place(child_block, 0, y)
        y += child_block.height

    inner_h = None if height is None else max(0, height - pad.vertical)
    window = stacked.crop(node.skip_rows, inner_h)

    block = Block()
    block.place(window, pad.left, pad.top)
    block.pad_to(pad.top + window.height + pad.bottom)
    block.scrollables.append(node.state)
    return block


# ---------------- plain text ----------------


def to_text(block: Block, width: int, height: Optional[int] = None) -> List[str]:
    rows = block.lines if height is None else block.lines[:height]
    out = []
    for line in rows:
        chars = [" "] * width
        for span in line:
            for i, ch in enumerate(span.text):
                x = span.x + i
                if 0 <= x < width:
                    chars[x] = ch
        out.append("".join(chars).rstrip())
    if height is not None:
        out.extend([""] * (height - len(out)))
    return out


def render_text(node, width: int, height: Optional[int] = None) -> List[str]:
    return to_text(layout(node, width, height), width, height)
