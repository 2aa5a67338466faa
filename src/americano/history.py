"""Aggregate partner/opponent/sit-out history from earlier rounds."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Iterable, Optional, Sequence, Set

from americano.models import MatchStatus, Player, Round

log = logging.getLogger(__name__)


def pair_key(a: str, b: str) -> str:
    """Order-independent key for two player ids."""
    return "|".join(sorted((a, b)))


def matchup_key(ids: Iterable[str]) -> str:
    """Order-independent key for the four players sharing a court."""
    return "|".join(sorted(ids))


@dataclass
class History:
    partners: Counter = field(default_factory=Counter)
    opponents: Counter = field(default_factory=Counter)
    matchups: Set[str] = field(default_factory=set)
    sit_outs: Counter = field(default_factory=Counter)
    # Appearances in matches not yet completed, so not in Player.games_played
    pending_games: Counter = field(default_factory=Counter)
    played_last_round: Set[str] = field(default_factory=set)
    played_two_rounds_ago: Set[str] = field(default_factory=set)
    sat_out_last_round: Set[str] = field(default_factory=set)

    def partner_count(self, a: str, b: str) -> int:
        return self.partners[pair_key(a, b)]

    def opponent_count(self, a: str, b: str) -> int:
        return self.opponents[pair_key(a, b)]

    def has_met(self, ids: Iterable[str]) -> bool:
        return matchup_key(ids) in self.matchups

    def games_played(self, player: Player) -> int:
        return player.games_played + self.pending_games[player.id]


def build_history(
    players: Sequence[Player],
    prior_rounds: Sequence[Round],
    round_number: Optional[int] = None,
) -> History:
    """Scan ``prior_rounds`` and count who has partnered, opposed and sat out.

    Sit-out counts start from each player's persisted ``sit_out_count`` and grow
    by one for every prior round listing the player as sitting out. When
    ``round_number`` is given, the playing/sitting sets of the two rounds right
    before it are captured for the consecutive-rest rule.
    """
    history = History()
    for p in players:
        history.sit_outs[p.id] = p.sit_out_count

    by_number: Dict[int, Round] = {}
    for rnd in prior_rounds:
        by_number[rnd.number] = rnd
        for match in rnd.matches:
            for team in (match.team_a, match.team_b):
                for a, b in combinations(team, 2):
                    history.partners[pair_key(a, b)] += 1
            for a in match.team_a:
                for b in match.team_b:
                    history.opponents[pair_key(a, b)] += 1
            history.matchups.add(matchup_key(match.player_ids))
            if match.status != MatchStatus.COMPLETED:
                for pid in match.player_ids:
                    history.pending_games[pid] += 1
        for pid in rnd.sitting_out:
            history.sit_outs[pid] += 1

    if round_number is not None:
        last = by_number.get(round_number - 1)
        before_last = by_number.get(round_number - 2)
        if last is not None:
            history.played_last_round = set(last.playing)
            history.sat_out_last_round = set(last.sitting_out)
        if before_last is not None:
            history.played_two_rounds_ago = set(before_last.playing)

    log.debug(
        "History over %d rounds: %d partner pairs, %d opponent pairs, %d matchups",
        len(prior_rounds), len(history.partners), len(history.opponents), len(history.matchups),
    )
    return history


def must_rest(history: History) -> Set[str]:
    """Players who played both of the two previous rounds."""
    return history.played_last_round & history.played_two_rounds_ago
