import curses


class ScreenRenderer:
    """Draws a laid-out block onto a curses window."""

    def __init__(self, theme):
        self.theme = theme

    def draw(self, win, block, focus_key=None):
        win.erase()
        h, w = win.getmaxyx()

        for y, line in enumerate(block.lines[:h]):
            for span in line:
                if span.x >= w or not span.text:
                    continue
                x = max(0, span.x)
                text = span.text[x - span.x :]
                try:
                    win.addnstr(y, x, text, w - x, self.theme.attr_for(span.style))
                except curses.error:
                    # writing the bottom-right cell raises after drawing
                    pass

        if focus_key is not None:
            for target in block.targets:
                if target.key != focus_key or not (0 <= target.row < h):
                    continue
                width = min(target.width, max(0, w - target.x))
                if width <= 0:
                    continue
                try:
                    win.chgat(target.row, target.x, width, self.theme.focus_attr())
                except curses.error:
                    pass

        win.refresh()
