import argparse
import curses
import logging
import os
import sys

import config_paths
import logging_setup
from app_state import AppState
from previews import PREVIEWS, describe, preview_names, render_preview
from revisions import REVISIONS
from saved_state import SavedStateStore

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"

logger = logging.getLogger(__name__)


def _revision_arg(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid revision: {value!r}") from None
    if number not in REVISIONS:
        raise argparse.ArgumentTypeError(
            f"revision must be one of {', '.join(str(r) for r in sorted(REVISIONS))}"
        )
    return number


def _count_arg(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("count must be a positive integer")
    return number


def initial_saved_state(store, restore=False):
    """Saved values for a new session. Every launch starts clean unless asked to resume."""
    if not restore:
        return {}
    return store.load()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="greetings",
        description="greetings - onboarding and greeting list in the terminal",
    )
    parser.add_argument("-v", "--version", action="store_true", help="print version")
    parser.add_argument(
        "-r", "--revision", type=_revision_arg, help="screen revision (1-3)"
    )
    parser.add_argument(
        "-n", "--count", type=_count_arg, help="number of generated subjects"
    )
    parser.add_argument("--dark", action="store_true", default=None, help="dark palette")
    parser.add_argument(
        "--restore",
        action="store_true",
        help="resume from the state saved when the last session exited",
    )
    parser.add_argument("--preview", metavar="NAME", help="print a preview and exit")
    parser.add_argument(
        "--list-previews", action="store_true", help="list preview names and exit"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if args.list_previews:
        for name in preview_names():
            print(describe(PREVIEWS[name]))
        return 0

    if args.preview:
        try:
            lines = render_preview(args.preview)
        except KeyError:
            print(f"Unknown preview: {args.preview}", file=sys.stderr)
            print(f"Available: {', '.join(preview_names())}", file=sys.stderr)
            return 2
        print("\n".join(lines).rstrip("\n"))
        return 0

    config_paths.ensure_config_dirs()
    logging_setup.configure(config_paths.LOG_PATH)
    cfg = config_paths.load_config()
    logging.getLogger().setLevel(cfg["LOG_LEVEL"])

    store = SavedStateStore(config_paths.SAVED_STATE_PATH)
    restored = initial_saved_state(store, args.restore)

    state = AppState.from_config(
        cfg,
        revision=args.revision,
        count=args.count,
        dark=args.dark,
        restored=restored,
    )
    logger.info("Starting revision %d", state.revision.number)

    def curses_main(stdscr):
        from orchestrator import Orchestrator

        Orchestrator(stdscr, state, store).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
