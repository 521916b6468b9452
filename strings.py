STRINGS = {
    "welcome": "Welcome to the Basics Codelab!",
    "continue": "Continue",
    "hello": "Hello,",
    "show_more": "Show more",
    "show_less": "Show less",
    "detail_text": (
        "Lorem ipsum dolor sit amet. Ea laudantium saepe sed esse voluptas "
        "eos sapiente quia. Sed necessitatibus commodi et adipisci ullam "
        "non placeat expedita est laudantium reiciendis."
    ),
}


def string_resource(key: str) -> str:
    # unknown keys are a programming error, let KeyError surface
    return STRINGS[key]
