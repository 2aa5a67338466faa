"""Scoring and best-split search for four players on one court.

Lower scores are better. The diversity score charges for every repeated
partnership and every repeated opposition, plus a near-prohibitive surcharge
when the same four players already shared a court in any arrangement.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from americano.history import History
from americano.models import Player, ScoringWeights
from americano.selection import split_by_sex

# Index layouts of the three ways to split A, B, C, D into two teams:
# AB|CD, AC|BD, AD|BC
SPLITS = ((0, 1, 2, 3), (0, 2, 1, 3), (0, 3, 1, 2))

Split = Tuple[List[str], List[str]]
Scorer = Callable[[List[str], List[str]], int]


@dataclass
class Pairing:
    team_a: List[str]
    team_b: List[str]
    score: int


def diversity_score(
    team_a: Sequence[str],
    team_b: Sequence[str],
    history: History,
    weights: ScoringWeights,
) -> int:
    score = weights.partner * history.partner_count(team_a[0], team_a[1])
    score += weights.partner * history.partner_count(team_b[0], team_b[1])
    for a in team_a:
        for b in team_b:
            score += weights.opponent * history.opponent_count(a, b)
    if history.has_met([*team_a, *team_b]):
        score += weights.repeat_matchup
    return score


def skill_gap(team_a: Sequence[Player], team_b: Sequence[Player]) -> int:
    return abs(sum(p.skill for p in team_a) - sum(p.skill for p in team_b))


def candidate_splits(ids: Sequence[str]) -> List[Split]:
    return [([ids[a], ids[b]], [ids[c], ids[d]]) for a, b, c, d in SPLITS]


def mixed_splits(four: Sequence[Player]) -> Optional[List[Split]]:
    """The two splits giving each team one man and one woman.

    Returns None unless the four players are exactly two men and two women.
    """
    men, women, _ = split_by_sex(four)
    if len(men) != 2 or len(women) != 2:
        return None
    m1, m2 = men[0].id, men[1].id
    w1, w2 = women[0].id, women[1].id
    return [([m1, w1], [m2, w2]), ([m1, w2], [m2, w1])]


def pick_best(splits: Sequence[Split], scorer: Scorer) -> Pairing:
    """Lowest-scoring split; the first one found wins a tie."""
    first_a, first_b = splits[0]
    best = Pairing(team_a=list(first_a), team_b=list(first_b), score=scorer(first_a, first_b))
    for team_a, team_b in splits[1:]:
        score = scorer(team_a, team_b)
        if score < best.score:
            best = Pairing(team_a=list(team_a), team_b=list(team_b), score=score)
    return best


def best_split(four: Sequence[Player], scorer: Scorer) -> Pairing:
    return pick_best(candidate_splits([p.id for p in four]), scorer)
