"""Flat scorebook-entry fields exchanged with the scoring API.

``to_api`` flattens a record for saving; ``from_api`` rebuilds a record from
a loaded entry, tolerating legacy field names and loosely typed values.
"""

from __future__ import annotations

from typing import Any

from scorebook.api.normalize import parse_int, parse_int_set, parse_optional_int
from scorebook.domain.codes import (
    ADVANCEMENT_BASES,
    FIELD_POSITIONS,
    QUALITY_AT_BAT_CODES,
    QualityIndicator,
    StatCounter,
    WhyCode,
)
from scorebook.engine.base_advancement import BaseAdvancementTracker
from scorebook.engine.count_state import CountState
from scorebook.engine.record import PlateAppearanceRecord, SlotIdentity


def _sorted(values: frozenset[int]) -> list[int]:
    return sorted(values)


def to_api(record: PlateAppearanceRecord) -> dict[str, Any]:
    snap = record.snapshot()
    identity = snap.identity
    why = snap.why_code.value if snap.why_code is not None else ""
    return {
        "team_id": identity.team_id,
        "game_id": identity.game_id,
        "inning_number": identity.inning_number,
        "home_or_away": identity.home_or_away,
        "batter_seq_id": identity.batter_seq_id,
        "order_number": identity.order_number,
        "batting_order_position": identity.order_number,
        "round": identity.round,
        "batter_jersey_number": identity.batter_jersey_number,
        "batter_name": identity.batter_name,
        "balls_before_play": snap.balls,
        "strikes_before_play": snap.strikes_total,
        "strikes_watching": snap.strikes_watching,
        "strikes_swinging": snap.strikes_swinging,
        "strikes_unsure": snap.strikes_unsure,
        "ball_swinging": snap.ball_swinging,
        "fouls": snap.fouls_total,
        "fouls_after_two_strikes": snap.fouls_after_two_strikes,
        "pitch_count": snap.pitch_count,
        "pa_why": why,
        "why_base_reached": why,
        "pa_result": snap.bases_reached_initial,
        "br_result": snap.final_base,
        "out_at": snap.out_at,
        "out": snap.out,
        "br_stolen_bases": _sorted(snap.stolen_bases),
        "base_running_hit_around": _sorted(snap.hit_around_bases),
        "hit_to": snap.hit_to,
        "pa_error_on": [snap.error_on] if snap.error_on is not None else [],
        "br_error_on": _sorted(snap.br_error_on),
        **{counter.value: value for counter, value in snap.stats.items()},
        **{indicator.value: value for indicator, value in snap.indicators.items()},
    }


def _identity_from_api(entry: dict[str, Any]) -> SlotIdentity:
    order_number = parse_int(entry.get("order_number", entry.get("batting_order_position")))
    return SlotIdentity(
        team_id=str(entry.get("team_id") or entry.get("teamId") or ""),
        game_id=str(entry.get("game_id") or entry.get("gameId") or ""),
        inning_number=parse_int(entry.get("inning_number")),
        home_or_away=str(entry.get("home_or_away") or "away"),
        batter_seq_id=parse_int(entry.get("batter_seq_id")),
        order_number=order_number,
        round=parse_int(entry.get("round"), default=1),
        batter_jersey_number=str(entry.get("batter_jersey_number") or ""),
        batter_name=str(entry.get("batter_name") or ""),
    )


def _why_from_api(entry: dict[str, Any]) -> WhyCode | None:
    why = WhyCode.parse(entry.get("pa_why"))
    if why is None:
        why = WhyCode.parse(entry.get("why_base_reached"))
    return why


def _final_base_from_api(entry: dict[str, Any], initial: int) -> int | None:
    if "br_result" not in entry:
        return initial if entry.get("pa_result") not in (None, "") else None
    return parse_optional_int(entry["br_result"])


def _first_position(raw: object) -> int | None:
    positions = parse_int_set(raw, FIELD_POSITIONS)
    return min(positions) if positions else None


def _indicators_from_api(entry: dict[str, Any], why: WhyCode | None) -> dict[QualityIndicator, int]:
    indicators = {indicator: parse_int(entry.get(indicator.value)) for indicator in QualityIndicator}
    if why is WhyCode.HH:
        indicators[QualityIndicator.HARD_HIT] = 1
    if why in QUALITY_AT_BAT_CODES:
        indicators[QualityIndicator.QAB] = 1
    return indicators


def from_api(entry: dict[str, Any]) -> PlateAppearanceRecord:
    why = _why_from_api(entry)
    initial = parse_int(entry.get("pa_result", entry.get("bases_reached")))
    count = CountState(
        balls=parse_int(entry.get("balls_before_play")),
        strikes_watching=parse_int(entry.get("strikes_watching")),
        strikes_swinging=parse_int(entry.get("strikes_swinging")),
        strikes_unsure=parse_int(entry.get("strikes_unsure")),
        ball_swinging=parse_int(entry.get("ball_swinging")),
        fouls_total=parse_int(entry.get("fouls")),
        fouls_after_two_strikes=parse_int(entry.get("fouls_after_two_strikes")),
    )
    bases = BaseAdvancementTracker(
        bases_reached_initial=initial,
        final_base=_final_base_from_api(entry, initial),
        out_at=parse_int(entry.get("out_at")),
        stolen_bases=parse_int_set(entry.get("br_stolen_bases", entry.get("stolen_bases")), ADVANCEMENT_BASES),
        hit_around_bases=parse_int_set(
            entry.get("base_running_hit_around", entry.get("hit_around_bases")), ADVANCEMENT_BASES
        ),
    )
    hit_to = parse_optional_int(entry.get("hit_to"))
    if not hit_to:
        hit_to = parse_optional_int(entry.get("detailed_result"))
    return PlateAppearanceRecord(
        identity=_identity_from_api(entry),
        count=count,
        bases=bases,
        why_code=why,
        hit_to=hit_to,
        error_on=_first_position(entry.get("pa_error_on")),
        br_error_on=parse_int_set(entry.get("br_error_on"), FIELD_POSITIONS),
        stats={counter: parse_int(entry.get(counter.value)) for counter in StatCounter},
        indicators=_indicators_from_api(entry, why),
    )
