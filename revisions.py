from dataclasses import dataclass


EXPANSION_CONDITIONAL = "conditional"
EXPANSION_STEP = "step"
EXPANSION_SPRING = "spring"

SMALL_SUBJECTS = ("World", "Compose")
DEFAULT_SUBJECT_COUNT = 1000


@dataclass(frozen=True)
class Revision:
    number: int
    lazy: bool
    saveable_onboarding: bool
    expansion: str
    small_subjects: bool

    def default_names(self, count: int = DEFAULT_SUBJECT_COUNT) -> list[str]:
        if self.small_subjects:
            return list(SMALL_SUBJECTS)
        return [str(i) for i in range(max(0, count))]

    @property
    def label(self) -> str:
        return f"r{self.number}"


REVISIONS = {
    1: Revision(
        number=1,
        lazy=False,
        saveable_onboarding=False,
        expansion=EXPANSION_CONDITIONAL,
        small_subjects=True,
    ),
    2: Revision(
        number=2,
        lazy=True,
        saveable_onboarding=True,
        expansion=EXPANSION_STEP,
        small_subjects=False,
    ),
    3: Revision(
        number=3,
        lazy=True,
        saveable_onboarding=True,
        expansion=EXPANSION_SPRING,
        small_subjects=False,
    ),
}

LATEST_REVISION = max(REVISIONS)


def get_revision(number) -> Revision:
    try:
        return REVISIONS[int(number)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(
            f"unknown revision {number!r}; expected one of {sorted(REVISIONS)}"
        ) from None
