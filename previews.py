from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from app_shell import app_shell
from greeting_list import greetings
from layout import render_text
from onboarding_screen import onboarding_screen
from revisions import LATEST_REVISION, get_revision
from runtime import Composer, component

DEFAULT_PREVIEW_HEIGHT = 24


@dataclass(frozen=True)
class Preview:
    name: str
    fn: Callable
    width: int
    height: Optional[int]
    dark: bool


PREVIEWS: Dict[str, Preview] = {}


def preview(name=None, width=40, height=None, dark=False):
    def register(fn):
        key = name or fn.__name__
        if key in PREVIEWS:
            raise ValueError(f"preview {key!r} is already registered")
        PREVIEWS[key] = Preview(key, fn, width, height, dark)
        return fn

    return register


@preview("MyApp", height=20)
def my_app_preview():
    return component("app", app_shell, get_revision(LATEST_REVISION))


@preview("Greetings", width=40)
def greetings_preview():
    return component("greetings", greetings, get_revision(LATEST_REVISION))


@preview("Onboarding", width=40, height=20)
def onboarding_preview():
    # nothing happens on click
    return component("onboarding", onboarding_screen, lambda: None)


@preview("Default (Dark)", width=40, dark=True)
@preview("Default", width=40)
def default_preview():
    return component("greetings", greetings, get_revision(LATEST_REVISION))


def preview_names() -> List[str]:
    return list(PREVIEWS)


def render_preview(name: str) -> List[str]:
    if name not in PREVIEWS:
        raise KeyError(name)
    p = PREVIEWS[name]
    height = p.height or DEFAULT_PREVIEW_HEIGHT
    composer = Composer(viewport=(height, p.width))
    try:
        node = composer.compose(p.fn)
        return render_text(node, p.width, height)
    finally:
        composer.dispose()


def describe(p: Preview) -> str:
    size = f"{p.width}x{p.height}" if p.height else f"{p.width}"
    mode = "dark" if p.dark else "light"
    return f"{p.name}  ({size}, {mode})"
