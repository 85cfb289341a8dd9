from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from scorebook.domain.codes import (
    FIELD_POSITIONS,
    HOME_PLATE,
    HOME_RUN_CODES,
    NO_HIT_LOCATION_CODES,
    OUT_CODES,
    REACH_FIRST_CODES,
    QualityIndicator,
    StatCounter,
    StrikeType,
    WhyCode,
)
from scorebook.engine.base_advancement import BaseAdvancementTracker
from scorebook.engine.count_state import CountState
from scorebook.engine.outcome import Outcome, classify

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_LINEUP_SIZE = 9

# Codes whose defaults put the batter on base; an out code picked after one resets the final base.
_BASE_DEFAULT_CODES = REACH_FIRST_CODES | HOME_RUN_CODES


@dataclass(frozen=True)
class LineupEntry:
    order_number: int
    jersey_number: str
    name: str
    position: str = ""


@dataclass(frozen=True)
class SlotIdentity:
    team_id: str
    game_id: str
    inning_number: int
    home_or_away: str
    batter_seq_id: int
    order_number: int = 0
    round: int = 1
    batter_jersey_number: str = ""
    batter_name: str = ""

    @property
    def request_key(self) -> str:
        return f"{self.team_id}/{self.game_id}/{self.inning_number}/{self.home_or_away}/{self.batter_seq_id}"


@dataclass(frozen=True)
class PlateAppearanceSnapshot:
    identity: SlotIdentity
    balls: int
    strikes_total: int
    strikes_watching: int
    strikes_swinging: int
    strikes_unsure: int
    ball_swinging: int
    fouls_total: int
    fouls_after_two_strikes: int
    pitch_count: int
    why_code: WhyCode | None
    bases_reached_initial: int
    final_base: int | None
    out_at: int
    out: int
    stolen_bases: frozenset[int]
    hit_around_bases: frozenset[int]
    hit_to: int | None
    error_on: int | None
    br_error_on: frozenset[int]
    stats: dict[StatCounter, int] = field(default_factory=dict)
    indicators: dict[QualityIndicator, int] = field(default_factory=dict)
    outcome: Outcome | None = None


def _position_or_none(n: int | None) -> int | None:
    if n is None or n not in FIELD_POSITIONS:
        return None
    return n


class PlateAppearanceRecord:
    """The working copy of one plate appearance while it is open for scoring.

    Every public mutator finishes with :meth:`normalize`, so the derived
    fields (strike total, pitch count, out flag) are consistent between any
    two calls. The outcome classification is recomputed on every read.
    """

    def __init__(
        self,
        identity: SlotIdentity,
        count: CountState | None = None,
        bases: BaseAdvancementTracker | None = None,
        why_code: WhyCode | None = None,
        hit_to: int | None = None,
        error_on: int | None = None,
        br_error_on: frozenset[int] = frozenset(),
        stats: dict[StatCounter, int] | None = None,
        indicators: dict[QualityIndicator, int] | None = None,
    ) -> None:
        self._identity = identity
        self._count = count or CountState()
        self._bases = bases or BaseAdvancementTracker()
        self._why = why_code
        self._hit_to = _position_or_none(hit_to)
        self._error_on = _position_or_none(error_on)
        self._br_error_on: set[int] = set(br_error_on) & FIELD_POSITIONS
        self._stats: dict[StatCounter, int] = {counter: 0 for counter in StatCounter}
        self._stats.update({k: max(0, v) for k, v in (stats or {}).items()})
        self._indicators: dict[QualityIndicator, int] = {indicator: 0 for indicator in QualityIndicator}
        self._indicators.update({k: 1 if v else 0 for k, v in (indicators or {}).items()})
        self._pitch_count = 0
        self.normalize()

    @classmethod
    def new_slot(
        cls,
        team_id: str,
        game_id: str,
        inning_number: int,
        home_or_away: str,
        batter_seq_id: int,
        lineup: Sequence[LineupEntry] = (),
    ) -> PlateAppearanceRecord:
        """Create the empty record for an unscored slot, filling the batter from the lineup."""
        seq_id = max(1, batter_seq_id)
        lineup_size = len(lineup) or DEFAULT_LINEUP_SIZE
        order_number = (seq_id - 1) % lineup_size + 1
        entry = next((e for e in lineup if e.order_number == order_number), None)
        identity = SlotIdentity(
            team_id=team_id,
            game_id=game_id,
            inning_number=inning_number,
            home_or_away=home_or_away,
            batter_seq_id=seq_id,
            order_number=order_number if lineup else 0,
            round=(seq_id - 1) // lineup_size + 1,
            batter_jersey_number=entry.jersey_number if entry else "",
            batter_name=entry.name if entry else "",
        )
        return cls(identity)

    # -- read access -------------------------------------------------------

    @property
    def identity(self) -> SlotIdentity:
        return self._identity

    @property
    def count(self) -> CountState:
        return self._count

    @property
    def bases(self) -> BaseAdvancementTracker:
        return self._bases

    @property
    def why_code(self) -> WhyCode | None:
        return self._why

    @property
    def pitch_count(self) -> int:
        return self._pitch_count

    @property
    def out_flag(self) -> int:
        return self._bases.out_flag

    @property
    def hit_to(self) -> int | None:
        return self._hit_to

    @property
    def error_on(self) -> int | None:
        return self._error_on

    @property
    def br_error_on(self) -> frozenset[int]:
        return frozenset(self._br_error_on)

    def stat(self, counter: StatCounter) -> int:
        return self._stats[counter]

    def indicator(self, indicator: QualityIndicator) -> int:
        return self._indicators[indicator]

    def outcome(self) -> Outcome:
        return classify(
            self._bases.bases_reached_initial,
            self._why,
            error_marked=self._error_on is not None,
            out_flag=self._bases.is_out,
        )

    def snapshot(self) -> PlateAppearanceSnapshot:
        return PlateAppearanceSnapshot(
            identity=self._identity,
            balls=self._count.balls,
            strikes_total=self._count.strikes_total,
            strikes_watching=self._count.strikes_watching,
            strikes_swinging=self._count.strikes_swinging,
            strikes_unsure=self._count.strikes_unsure,
            ball_swinging=self._count.ball_swinging,
            fouls_total=self._count.fouls_total,
            fouls_after_two_strikes=self._count.fouls_after_two_strikes,
            pitch_count=self._pitch_count,
            why_code=self._why,
            bases_reached_initial=self._bases.bases_reached_initial,
            final_base=self._bases.final_base,
            out_at=self._bases.out_at,
            out=self._bases.out_flag,
            stolen_bases=self._bases.stolen_bases,
            hit_around_bases=self._bases.hit_around_bases,
            hit_to=self._hit_to,
            error_on=self._error_on,
            br_error_on=self.br_error_on,
            stats=dict(self._stats),
            indicators=dict(self._indicators),
            outcome=self.outcome(),
        )

    def normalize(self) -> None:
        self._pitch_count = self._count.pitch_count(self._why)

    # -- count -------------------------------------------------------------

    def increment_balls(self) -> None:
        self._count.increment_balls()
        self.normalize()

    def decrement_balls(self) -> None:
        self._count.decrement_balls()
        self.normalize()

    def set_aggregate_balls(self, n: int) -> None:
        self._count.set_aggregate_balls(n)
        self.normalize()

    def clear_balls(self) -> None:
        self._count.clear_balls()
        self.normalize()

    def increment_strike_type(self, strike_type: StrikeType) -> None:
        self._count.increment_strike_type(strike_type)
        self.normalize()

    def decrement_strike_type(self, strike_type: StrikeType) -> None:
        self._count.decrement_strike_type(strike_type)
        self.normalize()

    def set_aggregate_strikes(self, n: int) -> None:
        self._count.set_aggregate_strikes(n)
        self.normalize()

    def clear_strikes(self) -> None:
        self._count.clear_strikes()
        self.normalize()

    def record_foul(self) -> None:
        self._count.record_foul()
        self.normalize()

    def remove_foul(self) -> None:
        self._count.remove_foul()
        self.normalize()

    # -- outcome -----------------------------------------------------------

    def select_why(self, code: WhyCode | None) -> None:
        """Pick the reason the appearance ended; picking the current reason clears it."""
        previous = self._why
        if code is None or code is previous:
            logger.debug("Clearing why code %s", previous)
            self._why = None
            if previous in OUT_CODES and self._bases.final_base == 0:
                # The out default goes with the code that set it.
                self._bases.set_final_base(None)
            self.normalize()
            return
        self._why = code
        self._apply_why_defaults(code, previous)
        self.normalize()

    def _apply_why_defaults(self, code: WhyCode, previous: WhyCode | None) -> None:
        if code in REACH_FIRST_CODES:
            self._bases.set_initial_base(1)
            final_base = self._bases.final_base
            if final_base is None or final_base < 1:
                self._bases.set_final_base(1)
                self._bases.reconcile()
        elif code in OUT_CODES:
            self._bases.set_initial_base(0)
            if self._bases.final_base is None or previous in _BASE_DEFAULT_CODES:
                self._bases.set_final_base(0)
        elif code in HOME_RUN_CODES:
            self._bases.set_initial_base(HOME_PLATE)
            self._bases.set_final_base(HOME_PLATE)

        if code in NO_HIT_LOCATION_CODES and code not in OUT_CODES:
            self._hit_to = None
        if code is not WhyCode.E:
            self._error_on = None
            self._br_error_on.clear()
        if code is WhyCode.KK and self._count.strikes_watching == 0:
            # A called third strike implies at least one watching strike.
            if self._count.strikes_unsure > 0:
                self._count.decrement_strike_type(StrikeType.UNSURE)
            self._count.increment_strike_type(StrikeType.WATCHING)

    # -- bases -------------------------------------------------------------

    def set_initial_base(self, n: int) -> None:
        self._bases.set_initial_base(n)
        self.normalize()

    def set_final_base(self, n: int | None) -> None:
        self._bases.set_final_base(n)
        self.normalize()

    def set_out_at(self, n: int) -> None:
        self._bases.set_out_at(n)
        self.normalize()

    def toggle_stolen_base(self, n: int) -> None:
        self._bases.toggle_stolen_base(n)
        self.normalize()

    def toggle_hit_around(self, n: int) -> None:
        self._bases.toggle_hit_around(n)
        self.normalize()

    # -- fielders ----------------------------------------------------------

    def set_hit_to(self, position: int | None) -> None:
        position = _position_or_none(position)
        self._hit_to = None if position == self._hit_to else position
        self.normalize()

    def set_error_on(self, position: int | None) -> None:
        position = _position_or_none(position)
        self._error_on = None if position == self._error_on else position
        self.normalize()

    def toggle_br_error(self, position: int) -> None:
        if position not in FIELD_POSITIONS:
            return
        self._br_error_on ^= {position}
        self.normalize()

    # -- secondary stats ---------------------------------------------------

    def increment_stat(self, counter: StatCounter) -> None:
        self._stats[counter] += 1
        self.normalize()

    def decrement_stat(self, counter: StatCounter) -> None:
        self._stats[counter] = max(0, self._stats[counter] - 1)
        self.normalize()

    def toggle_indicator(self, indicator: QualityIndicator) -> None:
        self._indicators[indicator] = 0 if self._indicators[indicator] else 1
        self.normalize()

    def copy(self) -> PlateAppearanceRecord:
        return PlateAppearanceRecord(
            identity=self._identity,
            count=self._count.copy(),
            bases=self._bases.copy(),
            why_code=self._why,
            hit_to=self._hit_to,
            error_on=self._error_on,
            br_error_on=self.br_error_on,
            stats=dict(self._stats),
            indicators=dict(self._indicators),
        )
