"""File logging for the terminal UI.

curses owns stdout/stderr while the app runs, so records go to a log file in
the config directory instead.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure(path, level="INFO"):
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_greetings_handler", False):
            root.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._greetings_handler = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return handler
