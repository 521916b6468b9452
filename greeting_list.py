from greeting_card import greeting
from lazy_list import LazyListState, lazy_column
from nodes import Column, Padding
from runtime import component, remember

LIST_PADDING = Padding.symmetric(vertical=1)


def subject_keys(subjects):
    """Stable item keys: the subject itself, disambiguated by occurrence."""
    seen: dict[str, int] = {}
    keys = []
    for subject in subjects:
        n = seen.get(subject, 0)
        seen[subject] = n + 1
        keys.append((subject, n))
    return keys


def greetings(revision, names=None):
    subjects = list(names) if names is not None else revision.default_names()
    keys = subject_keys(subjects)

    if not revision.lazy:
        items = tuple(
            component(("item", key), greeting, subject, revision)
            for key, subject in zip(keys, subjects)
        )
        return Column(items, padding=LIST_PADDING)

    state = remember(LazyListState)
    return lazy_column(
        state,
        subjects,
        keys.__getitem__,
        greeting,
        item_args=(revision,),
        padding=LIST_PADDING,
    )
