from scorebook.engine.base_advancement import BaseAdvancementTracker, RunnerState
from scorebook.engine.count_state import CountState
from scorebook.engine.outcome import Outcome, canonical_code, classify
from scorebook.engine.record import LineupEntry, PlateAppearanceRecord, PlateAppearanceSnapshot, SlotIdentity
from scorebook.engine.session import EditSession, PlateAppearanceStore, SessionState
from scorebook.engine.validation import validate_for_save

__all__ = [
    "BaseAdvancementTracker",
    "CountState",
    "EditSession",
    "LineupEntry",
    "Outcome",
    "PlateAppearanceRecord",
    "PlateAppearanceSnapshot",
    "PlateAppearanceStore",
    "RunnerState",
    "SessionState",
    "SlotIdentity",
    "canonical_code",
    "classify",
    "validate_for_save",
]
