"""Multi-round schedules that only ever rewrite rounds not yet played."""

import logging
import random
from typing import Dict, List, Optional, Sequence

from americano.functions import generate_round_matchups
from americano.models import Player, Round, ScheduleConfig

log = logging.getLogger(__name__)


def _preserved_rounds(existing: Sequence[Round], from_round: int, total_rounds: int) -> Dict[int, Round]:
    preserved: Dict[int, Round] = {}
    for rnd in existing:
        if rnd.completed:
            # Played rounds are never dropped or rewritten
            preserved[rnd.number] = rnd
        elif rnd.number < from_round and rnd.number <= total_rounds:
            preserved[rnd.number] = rnd
    return preserved


def generate_schedule(
    players: Sequence[Player],
    config: ScheduleConfig,
    existing_schedule: Sequence[Round] = (),
    from_round: int = 1,
    *,
    rng: Optional[random.Random] = None,
) -> List[Round]:
    """Return rounds 1..``config.rounds`` sorted by number.

    Rounds numbered below ``from_round`` and every completed round are kept
    as they are. All other rounds are generated in order, each one seeing the
    kept rounds plus the rounds generated before it as history.
    """
    rng = rng or random.Random()
    preserved = _preserved_rounds(existing_schedule, from_round, config.rounds)
    generated: List[Round] = []

    for number in range(1, config.rounds + 1):
        if number in preserved:
            continue
        context = sorted([*preserved.values(), *generated], key=lambda r: r.number)
        matches, sitting_out = generate_round_matchups(
            players, config.courts, config.policy, context, number,
            weights=config.weights, rest_rule=config.rest_rule, rng=rng,
        )
        generated.append(Round(number=number, matches=matches, sitting_out=sitting_out))

    log.info(
        "Schedule of %d rounds: kept %s, generated %s",
        config.rounds, sorted(preserved), [r.number for r in generated],
    )
    return sorted([*preserved.values(), *generated], key=lambda r: r.number)


def regenerate_schedule(
    players: Sequence[Player],
    config: ScheduleConfig,
    existing_schedule: Sequence[Round],
    current_round: int,
    *,
    rng: Optional[random.Random] = None,
) -> List[Round]:
    """Rebuild the rounds from ``current_round`` on after a roster or config change."""
    return generate_schedule(players, config, existing_schedule, current_round, rng=rng)
