from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from scorebook.domain.errors import ScorebookError, SessionClosedError
from scorebook.domain.result import Err, Ok, Result
from scorebook.engine.validation import validate_for_save

if TYPE_CHECKING:
    from collections.abc import Callable

    from scorebook.engine.record import PlateAppearanceRecord, PlateAppearanceSnapshot

logger = logging.getLogger(__name__)


class PlateAppearanceStore(Protocol):
    def save(self, record: PlateAppearanceRecord) -> Result[PlateAppearanceSnapshot, ScorebookError]: ...


class SessionState(Enum):
    OPEN = "open"
    SAVING = "saving"
    CLOSED = "closed"


class EditSession:
    """The one plate appearance currently open for scoring.

    Edits go to a working copy. While a save is in flight the surface is
    closed to new input; a failed save reopens it with the working copy
    untouched so the scorer can try again. Cancelling discards the copy.
    """

    def __init__(self, record: PlateAppearanceRecord) -> None:
        self._original = record
        self._working = record.copy()
        self._state = SessionState.OPEN

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def record(self) -> PlateAppearanceRecord:
        return self._working

    @property
    def is_editable(self) -> bool:
        return self._state is SessionState.OPEN

    def edit(
        self, action: Callable[[PlateAppearanceRecord], None]
    ) -> Result[PlateAppearanceSnapshot, SessionClosedError]:
        if not self.is_editable:
            logger.debug("Rejected edit while session is %s", self._state.value)
            return Err(SessionClosedError(message="Plate appearance is not open for editing", state=self._state.value))
        action(self._working)
        return Ok(self._working.snapshot())

    def save(self, store: PlateAppearanceStore) -> Result[PlateAppearanceSnapshot, ScorebookError]:
        if not self.is_editable:
            return Err(SessionClosedError(message="Plate appearance is not open for saving", state=self._state.value))
        validated = validate_for_save(self._working)
        if isinstance(validated, Err):
            logger.info("Save blocked: %s", validated.error.message)
            return validated

        self._state = SessionState.SAVING
        try:
            result = store.save(self._working)
        except Exception:
            self._state = SessionState.OPEN
            logger.warning("Save raised, keeping edits open")
            raise
        if isinstance(result, Ok):
            self._state = SessionState.CLOSED
            logger.info("Saved plate appearance %s", self._working.identity.request_key)
        else:
            self._state = SessionState.OPEN
            logger.warning("Save failed, keeping edits open: %s", result.error.message)
        return result

    def cancel(self) -> PlateAppearanceRecord:
        """Close without saving and hand back the record as it was opened."""
        self._state = SessionState.CLOSED
        self._working = self._original.copy()
        return self._original
