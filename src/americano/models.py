import random
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


def generate_id(rng: Optional[random.Random] = None) -> str:
    if rng is None:
        return str(uuid.uuid4())[:8]
    # Drawn from the caller's generator so seeded runs repeat their ids too
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))[:8]


class Policy(str, Enum):
    AMERICANO = "americano"   # free-for-all, partner/opponent variety
    BALANCED = "balanced"     # variety first, then skill balance
    MIXED = "mixed"           # one man + one woman per team
    MEXICANO = "mexicano"     # seeded by standings from round 2


class PlayerStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    REMOVED = "removed"


class MatchStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class Player:
    id: str
    name: str
    skill: int = 3            # 1..5
    sex: Optional[str] = None  # M | F
    status: PlayerStatus = PlayerStatus.ACTIVE
    points: int = 0
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    sit_out_count: int = 0
    joined_at_round: int = 0

    def is_eligible(self, round_number: int) -> bool:
        """Active and already arrived by ``round_number``."""
        return self.status == PlayerStatus.ACTIVE and self.joined_at_round <= round_number


@dataclass
class Match:
    id: str
    court: int
    team_a: List[str]  # player ids
    team_b: List[str]  # player ids
    status: MatchStatus = MatchStatus.UPCOMING
    score_a: Optional[int] = None
    score_b: Optional[int] = None

    @property
    def player_ids(self) -> List[str]:
        return [*self.team_a, *self.team_b]

    @property
    def completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED


@dataclass
class Round:
    number: int
    matches: List[Match] = field(default_factory=list)
    sitting_out: List[str] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return bool(self.matches) and all(m.completed for m in self.matches)

    @property
    def playing(self) -> List[str]:
        return [pid for m in self.matches for pid in m.player_ids]


@dataclass(frozen=True)
class ScoringWeights:
    partner: int = 10
    opponent: int = 5
    repeat_matchup: int = 1000
    skill_gap: int = 2


@dataclass
class ScheduleConfig:
    courts: int
    rounds: int
    policy: Policy = Policy.AMERICANO
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    rest_rule: bool = False
