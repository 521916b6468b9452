import curses

QUIT = "quit"
RECREATE = "recreate"
HELP = "help"

KEY_TAB = 9
KEY_ESC = 27

HELP_LINES = [
    "Keys",
    "",
    "  Tab / l        focus next control",
    "  Shift-Tab / h  focus previous control",
    "  Enter / Space  activate focused control",
    "  j / k          scroll one row",
    "  Ctrl-D / Ctrl-U  scroll half a page",
    "  g / G          first / last item",
    "  R              recreate the screen (saved state survives)",
    "  ?              toggle this help",
    "  q / Ctrl-C / Ctrl-X  quit",
]


class FocusNavigator:
    """Tracks the focused control by key so focus survives recomposition."""

    def __init__(self):
        self.focus_key = None
        self.viewport_height = None

    # ---------------- focus ----------------

    def visible_targets(self, block):
        height = self.viewport_height
        return [
            t for t in block.targets if height is None or 0 <= t.row < height
        ]

    def sync(self, block, viewport_height=None):
        if viewport_height is not None:
            self.viewport_height = viewport_height
        targets = self.visible_targets(block)
        keys = [t.key for t in targets]
        if self.focus_key not in keys:
            self.focus_key = keys[0] if keys else None
        return self.focused(block)

    def focused(self, block):
        for t in self.visible_targets(block):
            if t.key == self.focus_key:
                return t
        return None

    def move(self, block, delta):
        targets = self.visible_targets(block)
        if not targets:
            self.focus_key = None
            return None
        keys = [t.key for t in targets]
        if self.focus_key in keys:
            idx = (keys.index(self.focus_key) + delta) % len(keys)
        else:
            idx = 0 if delta >= 0 else len(keys) - 1
        self.focus_key = keys[idx]
        return targets[idx]

    def activate(self, block) -> bool:
        target = self.focused(block)
        if target is None:
            return False
        target.on_click()
        return True

    # ---------------- scrolling ----------------

    @staticmethod
    def scrollable(block):
        return block.scrollables[0] if block.scrollables else None

    def scroll(self, block, rows) -> int:
        state = self.scrollable(block)
        if state is None:
            return 0
        return state.scroll_by(rows)

    def jump(self, block, last: bool) -> bool:
        state = self.scrollable(block)
        if state is None or state.total == 0:
            return False
        state.scroll_to_item(state.total - 1 if last else 0)
        return True

    # ---------------- keys ----------------

    def handle_key(self, ch, block):
        if ch == -1:
            return None
        if ch in (3, 24, ord("q")):  # Ctrl+C / Ctrl+X
            return QUIT
        if ch == ord("?"):
            return HELP
        if ch == ord("R"):
            return RECREATE

        if ch in (KEY_TAB, ord("l"), curses.KEY_RIGHT):
            self.move(block, 1)
        elif ch in (curses.KEY_BTAB, ord("h"), curses.KEY_LEFT):
            self.move(block, -1)
        elif ch in (10, 13, curses.KEY_ENTER, ord(" ")):
            self.activate(block)
        elif ch in (ord("j"), curses.KEY_DOWN):
            self.scroll(block, 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll(block, -1)
        elif ch in (4, curses.KEY_NPAGE):  # Ctrl+D
            self.scroll(block, self._half_page())
        elif ch in (21, curses.KEY_PPAGE):  # Ctrl+U
            self.scroll(block, -self._half_page())
        elif ch in (ord("g"), curses.KEY_HOME):
            self.jump(block, last=False)
        elif ch in (ord("G"), curses.KEY_END):
            self.jump(block, last=True)
        return None

    def _half_page(self):
        return max(1, (self.viewport_height or 2) // 2)
