# ~/Apps/greetings/orchestrator.py
import curses
import logging
import time

from animation import FrameClock
from app_shell import SCREEN_GREETINGS, app_shell, current_screen
from layout import layout
from navigation import HELP, HELP_LINES, QUIT, RECREATE, FocusNavigator
from overlay import OverlayView
from runtime import Composer
from screen_layout import ScreenLayout
from screen_renderer import ScreenRenderer
from status_bar import render_status
from theme import Theme, palette_for

logger = logging.getLogger(__name__)

IDLE_TIMEOUT_MS = 100


class Orchestrator:
    def __init__(self, stdscr, app_state, store=None):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        self.stdscr.timeout(IDLE_TIMEOUT_MS)

        self.state = app_state
        self.store = store
        self.layout = ScreenLayout(stdscr)

        self.theme = Theme(palette_for(app_state.dark))
        self.theme.init_colors()
        self.renderer = ScreenRenderer(self.theme)

        self.navigator = FocusNavigator()
        self.overlay = OverlayView(self.layout)
        self.clock = FrameClock()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        self.composer = None
        self.block = None
        self._screen = None
        self._mount()

    # ---------------- composition ----------------

    def _mount(self):
        self.composer = Composer(
            saved_state=self.state.saved_state,
            frame_clock=self.clock,
            viewport=self.layout.viewport,
        )
        self.composer.compose(app_shell, self.state.revision, self.state.names)
        self._relayout()
        logger.info(
            "Mounted revision %d (%d subjects) at %dx%d",
            self.state.revision.number,
            len(self.state.names),
            self.layout.W,
            self.layout.content_h,
        )

    def _relayout(self):
        self.block = layout(self.composer.node, self.layout.W, self.layout.content_h)
        self.navigator.sync(self.block, self.layout.content_h)
        screen = current_screen(self.composer)
        if screen != self._screen:
            logger.info("Screen: %s", screen)
            self._screen = screen

    def recreate(self, reason):
        logger.info("Recreating composition (%s)", reason)
        self.state.carry_saved_state()
        self.composer.dispose()
        self.clock = FrameClock()
        self.stdscr.clear()
        self.stdscr.refresh()
        self.layout = ScreenLayout(self.stdscr)
        self.overlay.close()
        self.overlay.layout = self.layout
        self._mount()
        self._set_status("Recreated", 2)

    def teardown(self):
        snapshot = self.state.saved_state.snapshot()
        if self.store is not None:
            self.store.persist(snapshot)
        if self.composer is not None:
            self.composer.dispose()

    def _frame(self):
        if self.clock.running:
            self.clock.tick(time.monotonic())
        if self.composer.needs_recompose:
            self.composer.recompose()
            self._relayout()

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _status_context(self):
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "screen": self._screen,
            "revision": self.state.revision.number,
            "animating": self.clock.running,
        }
        target = self.navigator.focused(self.block)
        if target is not None:
            context["focus_description"] = target.description
        list_state = self.navigator.scrollable(self.block)
        if self._screen == SCREEN_GREETINGS:
            if list_state is not None:
                visible = list_state.visible_range()
                context["total"] = list_state.total
                if len(visible):
                    context["first_visible"] = visible.start
                    context["last_visible"] = visible.stop - 1
            else:
                context["total"] = len(self.state.names)
                context["first_visible"] = 0
                context["last_visible"] = len(self.state.names) - 1
        return context

    # ---------------- UI ----------------

    def redraw(self):
        if not self.overlay.visible:
            self.renderer.draw(
                self.layout.content_win, self.block, self.navigator.focus_key
            )

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        text = render_status(self._status_context(), w)
        try:
            sw.addnstr(0, 0, text, w, curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

        if self.overlay.visible:
            self.overlay.draw()

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        try:
            self._loop()
        finally:
            self.teardown()

    def _loop(self):
        while True:
            self._frame()
            self.redraw()

            if self.clock.running:
                self.stdscr.timeout(self.state.frame_interval_ms)
            else:
                self.stdscr.timeout(IDLE_TIMEOUT_MS)

            ch = self.stdscr.getch()
            if ch == -1:
                continue

            if ch == curses.KEY_RESIZE:
                self.recreate("resize")
                continue

            if self.overlay.visible:
                if ch in (3, 24):
                    break
                self.overlay.handle_key(ch)
                continue

            action = self.navigator.handle_key(ch, self.block)
            if action == QUIT:
                break
            if action == HELP:
                self.overlay.open(HELP_LINES)
            elif action == RECREATE:
                self.recreate("requested")
