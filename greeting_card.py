from animation import animate_as_state
from nodes import HEADLINE, Button, Card, Clip, Column, IconButton, Padding, Row, Text
from revisions import EXPANSION_CONDITIONAL, EXPANSION_SPRING
from runtime import MutableState, current_composer, remember
from spring import DAMPING_RATIO_MEDIUM_BOUNCY, STIFFNESS_LOW, SpringSpec
from strings import string_resource

EXPANDED_EXTENT = 48.0
UNITS_PER_ROW = 16
EXPAND_SPRING = SpringSpec(
    damping_ratio=DAMPING_RATIO_MEDIUM_BOUNCY,
    stiffness=STIFFNESS_LOW,
)

GLYPH_EXPAND_MORE = "▾"
GLYPH_EXPAND_LESS = "▴"

CARD_MARGIN = Padding(bottom=1, left=1, right=1)
CONTENT_PADDING = Padding.symmetric(vertical=1, horizontal=2)


def extent_rows(units: float) -> int:
    return int(max(0.0, units) // UNITS_PER_ROW)


def expansion_extent(expanded: bool, revision) -> float:
    target = EXPANDED_EXTENT if expanded else 0.0
    if revision.expansion == EXPANSION_SPRING:
        return animate_as_state(target, EXPAND_SPRING).clamped_value
    return target


def greeting(name: str, revision):
    expanded = remember(lambda: MutableState(False))
    return Card(card_content(name, revision, expanded), margin=CARD_MARGIN)


def card_content(name: str, revision, expanded: MutableState):
    is_expanded = expanded.value
    toggle_key = current_composer().current_path + ("toggle",)

    def toggle():
        expanded.value = not expanded.peek()

    label = string_resource("show_less" if is_expanded else "show_more")
    column = [Text(string_resource("hello")), Text(name, HEADLINE)]

    if revision.expansion == EXPANSION_CONDITIONAL:
        if is_expanded:
            column.append(Text(string_resource("detail_text")))
        control = Button(toggle_key, label, toggle)
    else:
        rows = extent_rows(expansion_extent(is_expanded, revision))
        column.append(Clip(Text(string_resource("detail_text")), rows))
        glyph = GLYPH_EXPAND_LESS if is_expanded else GLYPH_EXPAND_MORE
        control = IconButton(toggle_key, glyph, label, toggle)

    return Row((Column(tuple(column)), control), padding=CONTENT_PADDING)
