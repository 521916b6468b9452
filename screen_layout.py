import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: content (main), status bar (1 line), optional help overlay
        self.status_h = 1
        self.content_h = max(1, self.H - self.status_h)

        self.content_win = curses.newwin(self.content_h, self.W, 0, 0)
        # content never owns the cursor
        self.content_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, self.content_h, 0)
        self.status_win.leaveok(True)

    @property
    def viewport(self):
        return self.content_h, self.W
