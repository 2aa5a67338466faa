"""Session sizing and roster naming helpers."""

import math
from dataclasses import dataclass
from typing import Iterable

SKILL_LABELS = {
    1: "Newbie",
    2: "Beginner",
    3: "Intermediate",
    4: "Advanced",
    5: "Pro",
}

MAX_ROUNDS = 99


@dataclass
class RoundPlan:
    rounds: int
    step: int               # rounds after which every player has sat out equally
    matches_per_player: int


def skill_label(skill: int) -> str:
    return SKILL_LABELS.get(skill, "Intermediate")


def unique_player_name(name: str, existing_names: Iterable[str]) -> str:
    """``name``, or ``name (2)``, ``name (3)``... if already taken."""
    taken = set(existing_names)
    if name not in taken:
        return name
    n = 2
    while f"{name} ({n})" in taken:
        n += 1
    return f"{name} ({n})"


def match_duration_minutes(points_per_match: int) -> int:
    if points_per_match <= 16:
        return 8
    if points_per_match <= 21:
        return 10
    return 13


def recommend_rounds(
    active_players: int,
    courts: int,
    session_minutes: int,
    points_per_match: int = 21,
) -> RoundPlan:
    """Rounds that fill the session and give everyone the same number of matches.

    ``4 * courts`` seats rotate through ``N`` players, so sit-outs even out
    every ``N / gcd(4 * courts, N)`` rounds. The time-based round count is
    rounded up to the next multiple of that step.
    """
    n = max(4, active_players)
    courts = max(1, courts)
    time_based = math.floor(session_minutes / match_duration_minutes(points_per_match) + 0.5)
    step = n // math.gcd(4 * courts, n) or 1
    rounds = max(1, min(MAX_ROUNDS, math.ceil(max(1, time_based) / step) * step))
    return RoundPlan(
        rounds=rounds,
        step=step,
        matches_per_player=(4 * rounds * courts) // n,
    )
