from __future__ import annotations

from typing import TYPE_CHECKING

from scorebook.domain.errors import ValidationError
from scorebook.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from scorebook.engine.record import PlateAppearanceRecord


def validate_for_save(record: PlateAppearanceRecord) -> Result[PlateAppearanceRecord, ValidationError]:
    """Check the only fields that block a save: who batted and which slot it was.

    An undecided why code or base state is a legitimate partial entry and is
    saved as empty/zero.
    """
    identity = record.identity
    if not identity.batter_jersey_number.strip() and not identity.batter_name.strip():
        return Err(ValidationError(message="Batter jersey number or name is required", field="batter_jersey_number"))
    if identity.batter_seq_id < 1:
        return Err(ValidationError(message="Batter sequence id must be positive", field="batter_seq_id"))
    if not identity.team_id or not identity.game_id:
        return Err(ValidationError(message="Team and game are required", field="team_id"))
    return Ok(record)
