import curses
import unittest
from unittest import mock

import orchestrator
from app_shell import SCREEN_GREETINGS, SCREEN_ONBOARDING, app_shell, current_screen
from app_state import AppState
from greeting_card import EXPANDED_EXTENT, extent_rows
from nodes import Clip, find_all
from orchestrator import Orchestrator
from revisions import get_revision
from theme import Theme

FRAME = 1 / 60


class DummyWin:
    def __init__(self, h=24, w=60, keys=()):
        self._h = h
        self._w = w
        self.keys = list(keys)
        self.writes = []

    def getmaxyx(self):
        return self._h, self._w

    def getch(self):
        return self.keys.pop(0) if self.keys else ord("q")

    def addnstr(self, y, x, text, n, attr=0):
        self.writes.append((y, x, text[:n]))

    def erase(self):
        self.writes.clear()

    def _noop(self, *args):
        pass

    leaveok = keypad = nodelay = timeout = clear = refresh = chgat = _noop


class DummyStore:
    def __init__(self):
        self.saved = []

    def persist(self, data):
        self.saved.append(dict(data))
        return True


class OrchestratorTests(unittest.TestCase):
    def setUp(self):
        self.windows = []

        def newwin(h, w, y, x):
            win = DummyWin(h, w)
            self.windows.append(win)
            return win

        self.now = 0.0
        for patcher in (
            mock.patch.object(curses, "newwin", newwin),
            mock.patch.object(curses, "curs_set", lambda n: None),
            mock.patch.object(curses, "raw", lambda: None),
            mock.patch.object(Theme, "init_colors", lambda self: False),
            mock.patch.object(orchestrator.time, "monotonic", lambda: self.now),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)

    def _orchestrator(self, revision, keys=()):
        self.stdscr = DummyWin(24, 60, keys)
        self.store = DummyStore()
        state = AppState(get_revision(revision), names=["World", "Compose"])
        return Orchestrator(self.stdscr, state, self.store)

    @staticmethod
    def _click(orch, description, index=0):
        targets = [t for t in orch.block.targets if t.description == description]
        targets[index].on_click()
        orch._frame()

    def _continue(self, orch):
        self._click(orch, "Continue")
        self.assertEqual(current_screen(orch.composer), SCREEN_GREETINGS)

    def test_mounts_onboarding_with_focus_on_continue(self):
        orch = self._orchestrator(3)
        self.assertEqual(current_screen(orch.composer), SCREEN_ONBOARDING)
        self.assertEqual(orch.navigator.focused(orch.block).description, "Continue")

    def test_recreate_keeps_greetings_when_flag_is_saveable(self):
        orch = self._orchestrator(3)
        self._continue(orch)
        old_composer, old_clock = orch.composer, orch.clock

        orch.recreate("resize")

        self.assertIsNot(orch.composer, old_composer)
        self.assertIsNot(orch.clock, old_clock)
        self.assertEqual(orch.composer.frame_clock, orch.clock)
        self.assertEqual(old_composer.instances_of(app_shell), [])
        self.assertEqual(orch.state.recreations, 1)
        self.assertEqual(current_screen(orch.composer), SCREEN_GREETINGS)

    def test_recreate_returns_to_onboarding_in_first_revision(self):
        orch = self._orchestrator(1)
        self._continue(orch)

        orch.recreate("requested")
        self.assertEqual(current_screen(orch.composer), SCREEN_ONBOARDING)

    def test_frame_ticks_before_recomposing(self):
        orch = self._orchestrator(3)
        self._continue(orch)
        self._click(orch, "Show more")
        self.assertTrue(orch.clock.running)

        heights = []
        while orch.clock.running:
            self.now += FRAME
            orch._frame()
            # each frame's animated value is already composed and laid out
            self.assertFalse(orch.composer.needs_recompose)
            heights.append(find_all(orch.composer.node, Clip)[0].height)

        self.assertEqual(heights[-1], extent_rows(EXPANDED_EXTENT))
        self.assertTrue(all(h >= 0 for h in heights))

    def test_teardown_persists_snapshot_before_disposing(self):
        orch = self._orchestrator(2)
        self._continue(orch)

        orch.teardown()
        self.assertEqual(self.store.saved, [{"show_onboarding": False}])
        self.assertEqual(orch.composer.instances_of(app_shell), [])

    def test_teardown_in_first_revision_persists_empty_snapshot(self):
        orch = self._orchestrator(1)
        self._continue(orch)
        orch.teardown()
        self.assertEqual(self.store.saved, [{}])

    def test_run_activates_with_enter_and_persists_on_quit(self):
        orch = self._orchestrator(2, keys=[10, ord("q")])
        orch.run()
        self.assertEqual(self.store.saved, [{"show_onboarding": False}])

    def test_run_recreates_on_resize(self):
        orch = self._orchestrator(3, keys=[10, curses.KEY_RESIZE, -1, ord("q")])
        orch.run()
        self.assertEqual(orch.state.recreations, 1)
        self.assertEqual(self.store.saved, [{"show_onboarding": False}])

    def test_status_bar_reports_visible_items(self):
        orch = self._orchestrator(3)
        self._continue(orch)
        orch.redraw()
        status = orch.layout.status_win.writes[0][2]
        self.assertIn("r3", status)
        self.assertIn("of 2", status)


if __name__ == "__main__":
    unittest.main()
