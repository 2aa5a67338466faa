"""Decide who plays and who sits out a round."""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from americano.history import History, must_rest
from americano.models import Player, PlayerStatus

log = logging.getLogger(__name__)

MALE = "M"
FEMALE = "F"


def prioritize(
    players: Sequence[Player],
    history: History,
    rng: random.Random,
    rest_rule: bool = False,
) -> List[Player]:
    """Order players by who should play first.

    Fewest games first, then most sit-outs, then a random draw. With
    ``rest_rule`` on, anyone who sat out last round jumps the queue and anyone
    who played both previous rounds drops behind everybody else.
    """
    resting = must_rest(history) if rest_rule else set()

    def rest_rank(p: Player) -> int:
        if not rest_rule:
            return 0
        if p.id in history.sat_out_last_round:
            return 0
        if p.id in resting:
            return 2
        return 1

    return sorted(
        players,
        key=lambda p: (rest_rank(p), history.games_played(p), -history.sit_outs[p.id], rng.random()),
    )


def select_players(
    players: Sequence[Player],
    courts: int,
    history: History,
    rng: random.Random,
    rest_rule: bool = False,
) -> Tuple[List[Player], List[Player]]:
    """Split eligible players into (playing, sitting_out).

    At most ``courts * 4`` play, and only whole groups of four: a pool that
    does not fill its last court leaves its lowest-priority players out.
    """
    order = prioritize(players, history, rng, rest_rule)
    take = min(courts * 4, len(order) // 4 * 4)
    return order[:take], order[take:]


def split_by_sex(players: Sequence[Player]) -> Tuple[List[Player], List[Player], List[Player]]:
    men = [p for p in players if (p.sex or "").upper() == MALE]
    women = [p for p in players if (p.sex or "").upper() == FEMALE]
    unknown = [p for p in players if (p.sex or "").upper() not in (MALE, FEMALE)]
    return men, women, unknown


def select_players_by_sex(
    players: Sequence[Player],
    courts: int,
    history: History,
    rng: random.Random,
    rest_rule: bool = False,
) -> Tuple[List[Player], List[Player]]:
    """Pick ``courts * 2`` men and ``courts * 2`` women by the same priority.

    When one sex cannot fill its quota, the other sex's next players in
    priority order make up the difference, up to as many whole courts as the
    two pools can fill together.
    """
    men, women, unknown = split_by_sex(players)
    if unknown:
        log.warning("%d player(s) without M/F marker sit out a mixed round", len(unknown))

    quota = courts * 2
    men = prioritize(men, history, rng, rest_rule)
    women = prioritize(women, history, rng, rest_rule)
    playing = men[:quota] + women[:quota]
    spare = men[quota:] + women[quota:]

    target = min(courts * 4, (len(men) + len(women)) // 4 * 4)
    if len(playing) < target:
        fill = target - len(playing)
        log.info("Mixed round short of one sex: %d extra player(s) fill the courts", fill)
        playing, spare = playing + spare[:fill], spare[fill:]
    return playing, spare + list(unknown)


def validate_mixed_roster(players: Sequence[Player]) -> Optional[str]:
    """Return an error message when a mixed session cannot start, else None."""
    active = [p for p in players if p.status == PlayerStatus.ACTIVE]
    men, women, _ = split_by_sex(active)
    if len(men) < 2 or len(women) < 2:
        return (
            "Для микста нужно минимум 2 мужчины и 2 женщины "
            f"(сейчас мужчин: {len(men)}, женщин: {len(women)})"
        )
    return None
