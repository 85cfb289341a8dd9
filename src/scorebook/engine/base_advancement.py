from __future__ import annotations

import logging
from enum import Enum

from scorebook.domain.codes import ADVANCEMENT_BASES, HOME_PLATE

logger = logging.getLogger(__name__)


class RunnerState(Enum):
    OUT = "out"
    ADVANCED = "advanced"


def _clamp_base(n: int) -> int:
    return max(0, min(HOME_PLATE, n))


class BaseAdvancementTracker:
    """Where the batter got to: on the play, on the bases afterwards, and where put out.

    ``final_base`` is only ever raised automatically, and only while the
    runner is not out. A scorer override through ``set_final_base`` stands
    until the next stolen-base, hit-around or initial-base change.
    """

    def __init__(
        self,
        bases_reached_initial: int = 0,
        final_base: int | None = None,
        out_at: int = 0,
        stolen_bases: frozenset[int] = frozenset(),
        hit_around_bases: frozenset[int] = frozenset(),
    ) -> None:
        self._initial = _clamp_base(bases_reached_initial)
        self._final: int | None = None if final_base is None else _clamp_base(final_base)
        self._out_at = _clamp_base(out_at)
        self._stolen: set[int] = set(stolen_bases) & ADVANCEMENT_BASES
        self._hit_around: set[int] = (set(hit_around_bases) & ADVANCEMENT_BASES) - self._stolen

    @property
    def bases_reached_initial(self) -> int:
        return self._initial

    @property
    def final_base(self) -> int | None:
        return self._final

    @property
    def out_at(self) -> int:
        return self._out_at

    @property
    def stolen_bases(self) -> frozenset[int]:
        return frozenset(self._stolen)

    @property
    def hit_around_bases(self) -> frozenset[int]:
        return frozenset(self._hit_around)

    @property
    def is_out(self) -> bool:
        return self._final == 0 or self._out_at > 0

    @property
    def out_flag(self) -> int:
        return 1 if self.is_out else 0

    @property
    def state(self) -> RunnerState:
        return RunnerState.OUT if self.is_out else RunnerState.ADVANCED

    def max_advanced_base(self) -> int:
        return max(self._stolen | self._hit_around, default=0)

    def set_initial_base(self, n: int) -> None:
        self._initial = _clamp_base(n)
        self.reconcile()

    def set_final_base(self, n: int | None) -> None:
        self._final = None if n is None else _clamp_base(n)

    def set_out_at(self, n: int) -> None:
        base = _clamp_base(n)
        self._out_at = 0 if base == self._out_at else base

    def toggle_stolen_base(self, n: int) -> None:
        if not self._can_toggle(n, self._stolen, self._hit_around):
            return
        self._stolen ^= {n}
        self.reconcile()

    def toggle_hit_around(self, n: int) -> None:
        if not self._can_toggle(n, self._hit_around, self._stolen):
            return
        self._hit_around ^= {n}
        self.reconcile()

    def _can_toggle(self, n: int, own: set[int], other: set[int]) -> bool:
        if n not in ADVANCEMENT_BASES or n in other:
            logger.debug("Ignoring base toggle %d: not an advancement base or already taken", n)
            return False
        # Turning off is always allowed; turning on a base already reached on the play is not.
        if n not in own and n <= self._initial:
            logger.debug("Ignoring base toggle %d: batter already reached %d on the play", n, self._initial)
            return False
        return True

    def reconcile(self) -> None:
        """Raise ``final_base`` to the furthest base reached while the runner is not out."""
        if self.is_out:
            return
        advanced = self.max_advanced_base()
        if self._final is None:
            if advanced == 0:
                return
            current = self._initial
        else:
            current = self._final
        target = max(advanced, self._initial, current)
        if target != self._final:
            logger.debug("Advancing final base from %s to %d", self._final, target)
            self._final = target

    def copy(self) -> BaseAdvancementTracker:
        return BaseAdvancementTracker(
            bases_reached_initial=self._initial,
            final_base=self._final,
            out_at=self._out_at,
            stolen_bases=self.stolen_bases,
            hit_around_bases=self.hit_around_bases,
        )
