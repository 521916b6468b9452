import curses
from typing import List


class OverlayView:
    """Scrollable boxed modal drawn over the content area."""

    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None

    def open(self, lines: List[str]):
        if not isinstance(lines, list):
            lines = list(lines or [])

        self.lines = lines
        self.scroll = 0

        max_h = max(3, self.layout.content_h)
        overlay_h = max(3, min(len(lines) + 2, max_h))
        overlay_y = max(0, (self.layout.content_h - overlay_h) // 2)
        self.win = curses.newwin(overlay_h, self.layout.W, overlay_y, 0)
        self.win.leaveok(True)
        self.visible = True

    def close(self):
        self.visible = False
        self.lines = []
        self.scroll = 0
        self.win = None

    def content_rows(self) -> int:
        if self.win is None:
            return 0
        h, _ = self.win.getmaxyx()
        return max(0, h - 2)

    def handle_key(self, ch):
        if not self.visible or self.win is None:
            return
        if ch == -1:
            return

        content_rows = self.content_rows()
        max_scroll = max(0, len(self.lines) - content_rows)
        half_page = max(1, content_rows // 2)

        # close
        if ch in (27, ord("q"), 10, 13, curses.KEY_ENTER, ord("?")):
            self.close()
            return

        if ch in (4, curses.KEY_NPAGE):  # Ctrl+D
            self.scroll = min(max_scroll, self.scroll + half_page)
            return
        if ch in (21, curses.KEY_PPAGE):  # Ctrl+U
            self.scroll = max(0, self.scroll - half_page)
            return

        if ch in (ord("g"), curses.KEY_HOME):
            self.scroll = 0
            return
        if ch in (ord("G"), curses.KEY_END):
            self.scroll = max_scroll
            return

        # line scroll
        if ch in (ord("j"), curses.KEY_DOWN):
            self.scroll = min(max_scroll, self.scroll + 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll = max(0, self.scroll - 1)

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()

        max_visible = max(0, h - 2)
        start = self.scroll
        end = start + max_visible
        for i, line in enumerate(self.lines[start:end]):
            try:
                win.addnstr(1 + i, 1, line, w - 2)
            except curses.error:
                pass

        win.refresh()
