"""Canonical scorecard code and category for a plate appearance.

Everything here is a pure function of the appearance's outcome fields, so the
display layer can call it on every read without caching.

Code precedence (first match wins):

1. BB, HBP and FC show as themselves.
2. A bunt shows as ``"{base}B"``; a bunt with no base reached shows as ``BB``.
3. Base 0 is an out: K, KK, GO, FO, LO, FB, SF and SB show verbatim,
   anything else shows ``OUT``.
4. An error shows as ``"{base}E"``.
5. Bases 1-3 show as ``1B``/``2B``/``3B``.
6. Base 4 shows as ``GS`` for a grand slam, otherwise ``HR``.
"""

from __future__ import annotations

from dataclasses import dataclass

from scorebook.domain.codes import (
    HOME_PLATE,
    NO_HIT_LOCATION_CODES,
    STRIKEOUT_CODES,
    VERBATIM_OUT_CODES,
    Category,
    ColorTag,
    WhyCode,
)

_DIRECT_CODES: frozenset[WhyCode] = frozenset({WhyCode.BB, WhyCode.HBP, WhyCode.FC})
_HIT_CODES: frozenset[str] = frozenset({"1B", "2B", "3B", "HR", "HH", "S", "GS"})
_WALK_CODES: frozenset[str] = frozenset({"BB", "HBP"})


@dataclass(frozen=True)
class Outcome:
    code: str
    category: Category | None
    color: ColorTag
    is_hit: bool
    is_out: bool
    is_error: bool
    is_walk: bool
    is_bunt: bool
    is_other: bool
    shows_hit_location: bool


def canonical_code(bases_reached: int, why: WhyCode | None) -> str:
    if why in _DIRECT_CODES:
        return why.value
    if why is WhyCode.B:
        if 1 <= bases_reached <= HOME_PLATE:
            return f"{bases_reached}B"
        return "BB"
    if bases_reached == 0:
        if why in VERBATIM_OUT_CODES:
            return why.value
        return "OUT"
    if why is WhyCode.E:
        return f"{bases_reached}E"
    if bases_reached in (1, 2, 3):
        return f"{bases_reached}B"
    if bases_reached == HOME_PLATE:
        return "GS" if why is WhyCode.GS else "HR"
    return ""


def _is_bunt_walk(bases_reached: int, why: WhyCode | None) -> bool:
    return why is WhyCode.B and not 1 <= bases_reached <= HOME_PLATE


def _category(
    *,
    is_hit: bool,
    is_out: bool,
    is_error: bool,
    is_walk: bool,
    is_bunt: bool,
    is_other: bool,
) -> Category | None:
    if is_error:
        return Category.ERROR
    if is_walk:
        return Category.WALK
    if is_bunt:
        return Category.BUNT
    if is_hit:
        return Category.HIT
    if is_other:
        return Category.OTHER
    if is_out:
        return Category.OUT
    return None


def _color(why: WhyCode | None, category: Category | None, *, out_flag: bool) -> ColorTag:
    if out_flag or why in STRIKEOUT_CODES or category in (Category.OUT, Category.ERROR):
        return ColorTag.RED
    if category in (Category.WALK, Category.OTHER):
        return ColorTag.BLACK
    if category in (Category.HIT, Category.BUNT):
        return ColorTag.PURPLE
    return ColorTag.BLACK


def classify(
    bases_reached: int,
    why: WhyCode | None,
    *,
    error_marked: bool = False,
    out_flag: bool = False,
) -> Outcome:
    """Classify an appearance from its initial base, why code and error marker.

    ``error_marked`` reports a fielder charged with an error on the play; with
    no why code picked yet it classifies a reached base as an error. ``out_flag``
    is the record's derived out state and only affects the color tag.
    """
    code = canonical_code(bases_reached, why)
    bunt_walk = _is_bunt_walk(bases_reached, why)

    is_walk = code in _WALK_CODES or bunt_walk
    is_bunt = why is WhyCode.B and not bunt_walk
    is_other = why is WhyCode.FC
    reached_base = bases_reached > 0 or is_walk
    # A marked fielder with no why code yet means the batter reached on the error.
    is_error = why is WhyCode.E or (error_marked and why is None and reached_base)
    is_hit = code in _HIT_CODES and "E" not in code and not is_bunt and not is_error
    is_out = why is not None and not reached_base and not is_error

    category = _category(
        is_hit=is_hit,
        is_out=is_out,
        is_error=is_error,
        is_walk=is_walk,
        is_bunt=is_bunt,
        is_other=is_other,
    )
    return Outcome(
        code=code,
        category=category,
        color=_color(why, category, out_flag=out_flag),
        is_hit=is_hit,
        is_out=is_out,
        is_error=is_error,
        is_walk=is_walk,
        is_bunt=is_bunt,
        is_other=is_other,
        shows_hit_location=why is not None and why not in NO_HIT_LOCATION_CODES,
    )
