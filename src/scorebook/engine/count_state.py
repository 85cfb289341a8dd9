from __future__ import annotations

import logging

from scorebook.domain.codes import MAX_BALLS, MAX_STRIKES, STRIKEOUT_CODES, StrikeType, WhyCode

logger = logging.getLogger(__name__)

# Buckets drained, in order, when the displayed strike total is lowered.
_AGGREGATE_DECREASE_ORDER: tuple[StrikeType, ...] = (
    StrikeType.UNSURE,
    StrikeType.SWINGING,
    StrikeType.WATCHING,
)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class CountState:
    """Ball, strike and foul bookkeeping for one plate appearance.

    The per-type strike counters and the foul counters are the source of
    truth. ``strikes_total`` is a projection of them capped at two strikes:
    a foul only feeds the total while the batter has fewer than two strikes,
    and fouls hit with two strikes are parked in ``fouls_after_two_strikes``.
    """

    def __init__(
        self,
        balls: int = 0,
        strikes_watching: int = 0,
        strikes_swinging: int = 0,
        strikes_unsure: int = 0,
        ball_swinging: int = 0,
        fouls_total: int = 0,
        fouls_after_two_strikes: int = 0,
    ) -> None:
        self._balls = _clamp(balls, 0, MAX_BALLS)
        self._strikes: dict[StrikeType, int] = {
            StrikeType.WATCHING: max(0, strikes_watching),
            StrikeType.SWINGING: max(0, strikes_swinging),
            StrikeType.UNSURE: max(0, strikes_unsure),
            StrikeType.BALL_SWINGING: max(0, ball_swinging),
        }
        self._fouls_total = max(0, fouls_total)
        self._fouls_after_two_strikes = _clamp(fouls_after_two_strikes, 0, self._fouls_total)

    @property
    def balls(self) -> int:
        return self._balls

    @property
    def strikes_watching(self) -> int:
        return self._strikes[StrikeType.WATCHING]

    @property
    def strikes_swinging(self) -> int:
        return self._strikes[StrikeType.SWINGING]

    @property
    def strikes_unsure(self) -> int:
        return self._strikes[StrikeType.UNSURE]

    @property
    def ball_swinging(self) -> int:
        return self._strikes[StrikeType.BALL_SWINGING]

    @property
    def fouls_total(self) -> int:
        return self._fouls_total

    @property
    def fouls_after_two_strikes(self) -> int:
        return self._fouls_after_two_strikes

    @property
    def foul_strikes(self) -> int:
        """Fouls that were called strikes, i.e. hit before two strikes."""
        return self._fouls_total - self._fouls_after_two_strikes

    @property
    def strike_type_sum(self) -> int:
        return sum(self._strikes.values())

    @property
    def strikes_total(self) -> int:
        return min(MAX_STRIKES, self.strike_type_sum + self.foul_strikes)

    # -- balls -------------------------------------------------------------

    def increment_balls(self) -> None:
        self._balls = _clamp(self._balls + 1, 0, MAX_BALLS)

    def decrement_balls(self) -> None:
        self._balls = _clamp(self._balls - 1, 0, MAX_BALLS)

    def set_aggregate_balls(self, n: int) -> None:
        self._balls = _clamp(n, 0, MAX_BALLS)

    def clear_balls(self) -> None:
        self._balls = 0

    # -- strikes -----------------------------------------------------------

    def increment_strike_type(self, strike_type: StrikeType) -> None:
        self._strikes[strike_type] += 1

    def decrement_strike_type(self, strike_type: StrikeType) -> None:
        self._strikes[strike_type] = max(0, self._strikes[strike_type] - 1)

    def set_aggregate_strikes(self, n: int) -> None:
        """Edit the displayed strike total and redistribute the typed counters to match."""
        target = _clamp(n, 0, MAX_STRIKES)
        current = self.strikes_total
        if target > current:
            self._strikes[StrikeType.UNSURE] += target - current
            return
        for strike_type in _AGGREGATE_DECREASE_ORDER:
            while self.strikes_total > target and self._strikes[strike_type] > 0:
                self._strikes[strike_type] -= 1
        if self.strikes_total > target:
            logger.debug(
                "Strike total held at %d: remaining strikes come from fouls or ball-swinging",
                self.strikes_total,
            )

    def clear_strikes(self) -> None:
        for strike_type in self._strikes:
            self._strikes[strike_type] = 0
        self._fouls_total = 0
        self._fouls_after_two_strikes = 0

    # -- fouls -------------------------------------------------------------

    def record_foul(self) -> None:
        two_strikes = self.strikes_total >= MAX_STRIKES
        self._fouls_total += 1
        if two_strikes:
            self._fouls_after_two_strikes += 1

    def remove_foul(self) -> None:
        if self._fouls_total <= 0:
            return
        self._fouls_total -= 1
        if self._fouls_after_two_strikes > 0:
            self._fouls_after_two_strikes -= 1

    # -- pitch count -------------------------------------------------------

    def pitch_count(self, why: WhyCode | None) -> int:
        """Pitches thrown in the appearance, including the implied terminal pitch."""
        seen = self._balls + self.strike_type_sum + self._fouls_total
        if why is None:
            return seen
        if why is WhyCode.BB:
            return seen + max(0, MAX_BALLS - self._balls)
        if why in STRIKEOUT_CODES:
            return seen + max(0, MAX_STRIKES - self.strikes_total)
        return seen + 1

    def copy(self) -> CountState:
        return CountState(
            balls=self._balls,
            strikes_watching=self.strikes_watching,
            strikes_swinging=self.strikes_swinging,
            strikes_unsure=self.strikes_unsure,
            ball_swinging=self.ball_swinging,
            fouls_total=self._fouls_total,
            fouls_after_two_strikes=self._fouls_after_two_strikes,
        )
