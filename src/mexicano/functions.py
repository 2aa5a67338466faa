from typing import List, Sequence, Tuple

from americano.models import Player, PlayerStatus, Round


def standings_order(players: Sequence[Player]) -> List[Player]:
    """Players by points descending, wins breaking ties."""
    return sorted(players, key=lambda p: (-p.points, -p.games_won))


def seeded_split(four: Sequence[Player]) -> Tuple[List[str], List[str]]:
    """
    Top plays bottom: rank 1 partners rank 4 against ranks 2 and 3,
    so the strongest and weakest face two closely matched opponents.
    """
    r1, r2, r3, r4 = standings_order(four)
    return [r1.id, r4.id], [r2.id, r3.id]


def seeded_groups(players: Sequence[Player], courts: int) -> List[List[Player]]:
    """Slice the whole playing pool into courts of four in standings order."""
    ranked = standings_order(players)
    groups = []
    court = 0
    while court < courts and (court + 1) * 4 <= len(ranked):
        groups.append(ranked[court * 4:(court + 1) * 4])
        court += 1
    return groups


def is_round_indeterminate(schedule: Sequence[Round], round_number: int) -> bool:
    """
    A later round's seeding depends on the previous round's results; until
    that round is fully completed the pairings shown would only be a guess.
    """
    if round_number <= 1:
        return False
    previous = next((r for r in schedule if r.number == round_number - 1), None)
    return previous is None or not previous.completed


def calculate_standings(players: Sequence[Player]) -> List[dict]:
    standings = []
    for player in players:
        if player.status == PlayerStatus.REMOVED:
            continue
        standings.append({
            "id": player.id,
            "name": player.name,
            "points": player.points,
            "games_played": player.games_played,
            "games_won": player.games_won,
            "games_lost": player.games_lost,
            "sit_out_count": player.sit_out_count,
        })
    standings.sort(key=lambda x: (-x["points"], -x["games_won"]))
    for i, s in enumerate(standings):
        s["rank"] = i + 1
    return standings
