# ~/Apps/greetings/lazy_list.py
from layout import measure
from nodes import NO_PADDING, LazyColumn
from runtime import MutableState, component, current_composer


class LazyListState:
    def __init__(self, first_visible_index: int = 0, first_visible_offset: int = 0, beyond_bounds: int = 1):
        self._index = MutableState(max(0, first_visible_index))
        self._offset = MutableState(max(0, first_visible_offset))
        self.beyond_bounds = max(0, beyond_bounds)
        self.total = 0
        self.viewport_height = 0
        self.item_heights: dict[int, int] = {}
        self.estimated_item_height = 1
        self.last_visible_index = -1

    # ---- observed position ----

    @property
    def first_visible_index(self) -> int:
        return self._index.value

    @property
    def first_visible_offset(self) -> int:
        return self._offset.value

    def visible_range(self) -> range:
        first = self._index.peek()
        if self.total == 0:
            return range(0, 0)
        return range(first, max(first, self.last_visible_index) + 1)

    # ---- geometry ----

    def _height(self, index: int) -> int:
        return self.item_heights.get(index, self.estimated_item_height)

    def _content_height(self) -> int:
        return sum(self._height(i) for i in range(self.total))

    def _absolute(self, index: int, offset: int) -> int:
        return sum(self._height(i) for i in range(index)) + offset

    @property
    def max_scroll(self) -> int:
        return max(0, self._content_height() - self.viewport_height)

    def _set_absolute(self, position: int):
        position = max(0, min(position, self.max_scroll))
        index = 0
        while index < self.total - 1 and position >= self._height(index):
            position -= self._height(index)
            index += 1
        self._index.value = index
        self._offset.value = position

    # ---- scrolling ----

    def scroll_by(self, rows: int) -> int:
        if self.total == 0:
            return 0
        before = self._absolute(self._index.peek(), self._offset.peek())
        self._set_absolute(before + rows)
        after = self._absolute(self._index.peek(), self._offset.peek())
        return after - before

    def scroll_to_item(self, index: int, offset: int = 0):
        if self.total == 0:
            return
        index = max(0, min(index, self.total - 1))
        self._set_absolute(self._absolute(index, 0) + max(0, offset))

    @property
    def can_scroll_backward(self) -> bool:
        return self._index.peek() > 0 or self._offset.peek() > 0

    @property
    def can_scroll_forward(self) -> bool:
        return self._absolute(self._index.peek(), self._offset.peek()) < self.max_scroll

    def _record(self, heights: dict, last_visible: int):
        # evicted items lose their state, so their measured size is stale too
        self.item_heights = dict(heights)
        if heights:
            self.estimated_item_height = min(heights.values())
        self.last_visible_index = last_visible


def lazy_column(
    state: LazyListState,
    items,
    key_for,
    item_content,
    item_args=(),
    padding=NO_PADDING,
):
    """Compose only the items that fall inside the viewport window.

    One extra item is kept on each side of the window; everything else is
    left out of the composition and therefore disposed.
    """
    rows, cols = current_composer().viewport
    width = max(1, cols - padding.horizontal)
    viewport_h = max(1, rows - padding.vertical)

    total = len(items)
    state.total = total
    state.viewport_height = viewport_h

    index = state.first_visible_index
    offset = state.first_visible_offset
    if total == 0:
        state._record({}, -1)
        return LazyColumn(state, (), 0, 0, 0, padding)

    first = min(index, total - 1)
    start = max(0, first - state.beyond_bounds)
    children = []
    heights = {}

    def emit(i):
        node = component(("item", key_for(i)), item_content, items[i], *item_args)
        h = measure(node, width)
        heights[i] = h
        children.append(node)
        return h

    skip = 0
    for i in range(start, first):
        skip += emit(i)
    skip += offset

    used = -offset
    i = first
    while i < total and used < viewport_h:
        used += emit(i)
        i += 1
    last_visible = i - 1

    for j in range(i, min(total, i + state.beyond_bounds)):
        emit(j)

    state._record(heights, last_visible)
    return LazyColumn(state, tuple(children), start, skip, total, padding)
