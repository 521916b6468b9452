from revisions import get_revision
from saved_state import SavedStateRegistry


class AppState:
    def __init__(self, revision, names=None, dark=False, frame_interval_ms=16, restored=None):
        self.revision = revision
        self.names = list(names) if names is not None else revision.default_names()
        self.dark = dark
        self.frame_interval_ms = frame_interval_ms
        self.saved_state = SavedStateRegistry(restored)
        self.recreations = 0

    @classmethod
    def from_config(cls, cfg, revision=None, count=None, dark=None, restored=None):
        rev = get_revision(revision if revision is not None else cfg["REVISION"])
        names = cfg.get("NAMES")
        if names is None:
            subject_count = count if count is not None else cfg["SUBJECT_COUNT"]
            names = rev.default_names(subject_count)
        return cls(
            rev,
            names=names,
            dark=cfg["DARK"] if dark is None else dark,
            frame_interval_ms=cfg["FRAME_INTERVAL_MS"],
            restored=restored,
        )

    @property
    def frame_interval(self) -> float:
        return self.frame_interval_ms / 1000.0

    def carry_saved_state(self):
        """Hand saved values over to a fresh registry for the next composition."""
        self.saved_state = SavedStateRegistry(self.saved_state.snapshot())
        self.recreations += 1
        return self.saved_state
