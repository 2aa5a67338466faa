from dataclasses import replace
from typing import List, Sequence, Tuple

from americano.models import Match, Player


def clamp_score(score_a: int, score_b: int, points_per_match: int) -> Tuple[int, int]:
    """Keep a score within the points played per match.

    The excess over ``points_per_match`` comes off the higher score first.
    """
    score_a, score_b = max(0, score_a), max(0, score_b)
    excess = score_a + score_b - points_per_match
    if excess <= 0:
        return score_a, score_b
    if score_a >= score_b:
        score_a = max(0, score_a - excess)
    else:
        score_b = max(0, score_b - excess)
    return score_a, score_b


def _update_player_stats(player: Player, score_for: int, score_against: int) -> Player:
    won = score_for > score_against
    return replace(
        player,
        games_played=player.games_played + 1,
        points=player.points + score_for,
        games_won=player.games_won + (1 if won else 0),
        games_lost=player.games_lost + (0 if won else 1),
    )


def record_match_result(players: Sequence[Player], match: Match) -> List[Player]:
    """New player records with ``match``'s score counted in."""
    if match.score_a is None or match.score_b is None:
        return list(players)
    updated = []
    for p in players:
        if p.id in match.team_a:
            updated.append(_update_player_stats(p, match.score_a, match.score_b))
        elif p.id in match.team_b:
            updated.append(_update_player_stats(p, match.score_b, match.score_a))
        else:
            updated.append(p)
    return updated
