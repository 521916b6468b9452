import logging

from greeting_list import greetings
from nodes import Surface
from onboarding_screen import onboarding_screen
from runtime import MutableState, component, remember, remember_saveable

logger = logging.getLogger(__name__)

ONBOARDING_KEY = "show_onboarding"

SCREEN_ONBOARDING = "onboarding"
SCREEN_GREETINGS = "greetings"


def app_shell(revision, names=None):
    if revision.saveable_onboarding:
        show_onboarding = remember_saveable(ONBOARDING_KEY, True)
    else:
        show_onboarding = remember(lambda: MutableState(True))

    if show_onboarding.value:

        def on_continue_clicked():
            if show_onboarding.peek():
                logger.info("Onboarding finished, showing greetings")
            show_onboarding.value = False

        body = component(SCREEN_ONBOARDING, onboarding_screen, on_continue_clicked)
    else:
        body = component(SCREEN_GREETINGS, greetings, revision, names)
    return Surface(body)


def current_screen(composer):
    if composer.instances_of(onboarding_screen):
        return SCREEN_ONBOARDING
    if composer.instances_of(greetings):
        return SCREEN_GREETINGS
    return None
