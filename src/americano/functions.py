import logging
import random
from typing import List, Optional, Sequence, Tuple

from americano.history import build_history
from americano.models import Match, Player, Policy, Round, ScoringWeights, generate_id
from americano.policies import get_policy

log = logging.getLogger(__name__)


def generate_round_matchups(
    players: Sequence[Player],
    courts: int,
    policy: Policy,
    prior_rounds: Sequence[Round] = (),
    round_number: int = 1,
    *,
    weights: Optional[ScoringWeights] = None,
    rest_rule: bool = False,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Match], List[str]]:
    """Build one round: who plays on which court with whom, and who sits out.

    Every eligible player ends up either in exactly one match or in the
    sitting-out list. With fewer than four players to put on court the round
    is empty and everybody sits out.
    """
    rng = rng or random.Random()
    eligible = [p for p in players if p.is_eligible(round_number)]
    everyone = [p.id for p in eligible]

    if len(eligible) < 4 or courts < 1:
        log.warning("Round %d: %d eligible player(s) on %d court(s), nothing to schedule",
                    round_number, len(eligible), courts)
        return [], everyone

    strategy = get_policy(policy, weights, rest_rule)
    history = build_history(players, prior_rounds, round_number)
    playing, _ = strategy.select_players(eligible, courts, history, rng)
    if len(playing) < 4:
        log.warning("Round %d: only %d player(s) selected to play", round_number, len(playing))
        return [], everyone

    pairings = strategy.generate_round(playing, courts, history, rng, round_number)
    matches = [
        Match(id=generate_id(rng), court=court, team_a=pairing.team_a, team_b=pairing.team_b)
        for court, pairing in enumerate(pairings, start=1)
    ]

    on_court = {pid for m in matches for pid in m.player_ids}
    sitting_out = [pid for pid in everyone if pid not in on_court]
    log.info("Round %d (%s): %d match(es), %d sitting out",
             round_number, strategy.name.value, len(matches), len(sitting_out))
    return matches, sitting_out


def reshuffle_match(
    players: Sequence[Player],
    policy: Policy,
    candidate_pool: Sequence[str],
    court: int,
    prior_rounds: Sequence[Round] = (),
    *,
    weights: Optional[ScoringWeights] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Match]:
    """Replace one court's match using the first four free candidates.

    ``candidate_pool`` must already exclude anyone busy on another court.
    Repeated ids count once. Returns None when fewer than four distinct
    candidates are available.
    """
    by_id = {p.id: p for p in players}
    pool = [by_id[pid] for pid in dict.fromkeys(candidate_pool) if pid in by_id]
    if len(pool) < 4:
        log.warning("Reshuffle on court %d: only %d candidate(s)", court, len(pool))
        return None

    strategy = get_policy(policy, weights)
    history = build_history(players, prior_rounds)
    pairing = strategy.pair_four(pool[:4], history)
    return Match(
        id=generate_id(rng), court=court,
        team_a=pairing.team_a, team_b=pairing.team_b,
    )
