import curses
from dataclasses import dataclass

from layout import CONTROL
from nodes import HEADLINE, PRIMARY


@dataclass(frozen=True)
class Palette:
    name: str
    primary: tuple  # (fg, bg) of cards
    control: tuple
    focus: tuple


LIGHT = Palette(
    name="light",
    primary=(curses.COLOR_WHITE, curses.COLOR_MAGENTA),
    control=(curses.COLOR_MAGENTA, -1),
    focus=(curses.COLOR_BLACK, curses.COLOR_CYAN),
)

DARK = Palette(
    name="dark",
    primary=(curses.COLOR_BLACK, curses.COLOR_MAGENTA),
    control=(curses.COLOR_CYAN, -1),
    focus=(curses.COLOR_BLACK, curses.COLOR_WHITE),
)


def palette_for(dark: bool) -> Palette:
    return DARK if dark else LIGHT


class Theme:
    PAIR_PRIMARY = 1
    PAIR_CONTROL = 2
    PAIR_FOCUS = 3

    def __init__(self, palette: Palette):
        self.palette = palette
        self.colors = False

    def init_colors(self):
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_PRIMARY, *self.palette.primary)
            curses.init_pair(self.PAIR_CONTROL, *self.palette.control)
            curses.init_pair(self.PAIR_FOCUS, *self.palette.focus)
            self.colors = True
        except curses.error:
            self.colors = False
        return self.colors

    def _pair(self, number):
        return curses.color_pair(number) if self.colors else 0

    def attr_for(self, style) -> int:
        attr = curses.A_NORMAL
        if HEADLINE in style:
            attr |= curses.A_BOLD
        if PRIMARY in style:
            attr |= self._pair(self.PAIR_PRIMARY)
        elif CONTROL in style:
            attr |= self._pair(self.PAIR_CONTROL)
        return attr

    def focus_attr(self) -> int:
        if self.colors:
            return self._pair(self.PAIR_FOCUS) | curses.A_BOLD
        return curses.A_REVERSE | curses.A_BOLD
