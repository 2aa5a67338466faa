"""Matching policies behind one interface.

Every policy answers the same four questions: who plays this round
(``select_players``), what a given split costs (``score_split``), how four
players are split into teams (``pair_four``) and how a whole round is laid
out over the courts (``generate_round``).
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from americano.history import History
from americano.models import Player, Policy, ScoringWeights
from americano.pairing import Pairing, best_split, diversity_score, mixed_splits, pick_best, skill_gap
from americano.selection import select_players, select_players_by_sex, split_by_sex
from mexicano.functions import seeded_groups, seeded_split

log = logging.getLogger(__name__)

PairFn = Callable[[Sequence[Player], History], Pairing]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class MatchingPolicy:
    """Free-for-all: fewest games play, splits chosen for partner/opponent variety."""

    name = Policy.AMERICANO
    min_attempts = 5
    max_attempts = 20

    def __init__(self, weights: Optional[ScoringWeights] = None, rest_rule: bool = False):
        self.weights = weights or ScoringWeights()
        self.rest_rule = rest_rule

    def attempts(self, pool_size: int) -> int:
        return _clamp(pool_size, self.min_attempts, self.max_attempts)

    def select_players(
        self, players: Sequence[Player], courts: int, history: History, rng: random.Random,
    ) -> Tuple[List[Player], List[Player]]:
        return select_players(players, courts, history, rng, self.rest_rule)

    def score_split(
        self, team_a: Sequence[str], team_b: Sequence[str], history: History, lookup: Dict[str, Player],
    ) -> int:
        return diversity_score(team_a, team_b, history, self.weights)

    def pair_four(self, four: Sequence[Player], history: History) -> Pairing:
        lookup = {p.id: p for p in four}
        return best_split(four, lambda a, b: self.score_split(a, b, history, lookup))

    def group(self, order: Sequence[Player], courts: int) -> List[List[Player]]:
        """Consecutive fours in court order; a short tail is dropped."""
        return [list(order[i * 4:(i + 1) * 4]) for i in range(min(courts, len(order) // 4))]

    def generate_round(
        self,
        playing: Sequence[Player],
        courts: int,
        history: History,
        rng: random.Random,
        round_number: int,
    ) -> List[Pairing]:
        return self._search(playing, courts, history, rng, self.pair_four)

    def _search(
        self,
        playing: Sequence[Player],
        courts: int,
        history: History,
        rng: random.Random,
        pair: PairFn,
    ) -> List[Pairing]:
        """Randomized local search over court groupings.

        The first attempt keeps the incoming order, later attempts reshuffle it.
        The attempt with the lowest summed court score wins; earlier attempts
        win ties.
        """
        best: List[Pairing] = []
        best_total: Optional[int] = None
        attempts = self.attempts(len(playing))
        for attempt in range(attempts):
            order = list(playing)
            if attempt:
                rng.shuffle(order)
            pairings = [pair(group, history) for group in self.group(order, courts)]
            total = sum(p.score for p in pairings)
            if best_total is None or total < best_total:
                best, best_total = pairings, total
                if total == 0:
                    break
        log.debug("%s: best grouping scored %s over up to %d attempts", self.name.value, best_total, attempts)
        return best


class BalancedPolicy(MatchingPolicy):
    """Variety first; team skill totals only separate near-ties."""

    name = Policy.BALANCED
    min_attempts = 10
    max_attempts = 30

    def attempts(self, pool_size: int) -> int:
        return _clamp(pool_size * 3 // 2, self.min_attempts, self.max_attempts)

    def score_split(self, team_a, team_b, history, lookup):
        score = super().score_split(team_a, team_b, history, lookup)
        gap = skill_gap([lookup[pid] for pid in team_a], [lookup[pid] for pid in team_b])
        return score + self.weights.skill_gap * gap


class MixedPolicy(MatchingPolicy):
    """Every team is one man and one woman whenever the court allows it."""

    name = Policy.MIXED

    def select_players(self, players, courts, history, rng):
        return select_players_by_sex(players, courts, history, rng, self.rest_rule)

    def pair_four(self, four, history):
        splits = mixed_splits(four)
        if splits is None:
            return super().pair_four(four, history)
        lookup = {p.id: p for p in four}
        return pick_best(splits, lambda a, b: self.score_split(a, b, history, lookup))

    def group(self, order, courts):
        men, women, _ = split_by_sex(order)
        groups = []
        while len(groups) < courts:
            if len(men) >= 2 and len(women) >= 2:
                groups.append(men[:2] + women[:2])
                men, women = men[2:], women[2:]
                continue
            # Not enough of one sex left: fill the court from whoever remains
            rest = men + women
            if len(rest) < 4:
                break
            groups.append(rest[:4])
            rest = rest[4:]
            men, women, _ = split_by_sex(rest)
        return groups


class MexicanoPolicy(MatchingPolicy):
    """Round 1 is free-for-all; later rounds are seeded by standings."""

    name = Policy.MEXICANO

    def pair_four(self, four, history):
        team_a, team_b = seeded_split(four)
        return Pairing(team_a=team_a, team_b=team_b, score=diversity_score(team_a, team_b, history, self.weights))

    def generate_round(self, playing, courts, history, rng, round_number):
        if round_number <= 1:
            # No standings yet
            return self._search(playing, courts, history, rng, super().pair_four)
        return [self.pair_four(group, history) for group in seeded_groups(playing, courts)]


POLICIES: Dict[Policy, Type[MatchingPolicy]] = {
    Policy.AMERICANO: MatchingPolicy,
    Policy.BALANCED: BalancedPolicy,
    Policy.MIXED: MixedPolicy,
    Policy.MEXICANO: MexicanoPolicy,
}


def get_policy(
    policy: Policy, weights: Optional[ScoringWeights] = None, rest_rule: bool = False,
) -> MatchingPolicy:
    return POLICIES[Policy(policy)](weights, rest_rule)
