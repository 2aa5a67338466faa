"""Request bodies for the HTTP routers; each converts to the core dataclasses."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

import settings
from americano.models import (
    Match, MatchStatus, Player, PlayerStatus, Policy, Round, ScheduleConfig, ScoringWeights,
)


class PlayerIn(BaseModel):
    id: str
    name: str
    skill: int = Field(3, ge=1, le=5)
    sex: Optional[str] = None
    status: PlayerStatus = PlayerStatus.ACTIVE
    points: int = 0
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    sit_out_count: int = 0
    joined_at_round: int = 0

    def to_player(self) -> Player:
        return Player(**self.model_dump())


class MatchIn(BaseModel):
    id: str
    court: int = Field(..., ge=1)
    team_a: List[str] = Field(..., min_length=2, max_length=2)
    team_b: List[str] = Field(..., min_length=2, max_length=2)
    status: MatchStatus = MatchStatus.UPCOMING
    score_a: Optional[int] = None
    score_b: Optional[int] = None

    @model_validator(mode="after")
    def check_distinct_players(self):
        ids = [*self.team_a, *self.team_b]
        if len(set(ids)) != len(ids):
            raise ValueError("В матче один игрок указан дважды")
        return self

    def to_match(self) -> Match:
        return Match(**self.model_dump())


class RoundIn(BaseModel):
    number: int = Field(..., ge=1)
    matches: List[MatchIn] = []
    sitting_out: List[str] = []

    def to_round(self) -> Round:
        return Round(
            number=self.number,
            matches=[m.to_match() for m in self.matches],
            sitting_out=list(self.sitting_out),
        )


class ScheduleConfigIn(BaseModel):
    courts: int = Field(..., ge=1)
    rounds: int = Field(..., ge=1, le=99)
    policy: Policy = Policy.AMERICANO
    rest_rule: bool = settings.REST_RULE

    def to_config(self) -> ScheduleConfig:
        return ScheduleConfig(
            courts=self.courts,
            rounds=self.rounds,
            policy=self.policy,
            weights=default_weights(),
            rest_rule=self.rest_rule,
        )


def default_weights() -> ScoringWeights:
    return ScoringWeights(
        partner=settings.PARTNER_REPEAT_PENALTY,
        opponent=settings.OPPONENT_REPEAT_PENALTY,
        repeat_matchup=settings.MATCHUP_REPEAT_PENALTY,
        skill_gap=settings.SKILL_GAP_WEIGHT,
    )


class RoundRequest(BaseModel):
    players: List[PlayerIn]
    courts: int = Field(..., ge=1)
    policy: Policy = Policy.AMERICANO
    prior_rounds: List[RoundIn] = []
    round_number: int = Field(1, ge=1)
    rest_rule: bool = settings.REST_RULE


class ScheduleRequest(BaseModel):
    players: List[PlayerIn]
    config: ScheduleConfigIn
    existing_schedule: List[RoundIn] = []
    from_round: int = Field(1, ge=1)


class RegenerateRequest(BaseModel):
    players: List[PlayerIn]
    config: ScheduleConfigIn
    existing_schedule: List[RoundIn]
    current_round: int = Field(..., ge=1)


class ReshuffleRequest(BaseModel):
    players: List[PlayerIn]
    policy: Policy = Policy.AMERICANO
    candidate_pool: List[str]
    court: int = Field(..., ge=1)
    prior_rounds: List[RoundIn] = []


class RosterRequest(BaseModel):
    players: List[PlayerIn]


class NewPlayersRequest(BaseModel):
    player_names: str
    existing: List[PlayerIn] = []
    skill: int = Field(3, ge=1, le=5)
    sex: Optional[str] = None
    current_round: int = Field(0, ge=0)


class PlanRequest(BaseModel):
    active_players: int = Field(..., ge=0)
    courts: int = Field(..., ge=1)
    session_minutes: int = Field(..., ge=1)
    points_per_match: int = Field(21, ge=1)


class ScoreRequest(BaseModel):
    players: List[PlayerIn]
    match: MatchIn
    score_a: int = Field(..., ge=0)
    score_b: int = Field(..., ge=0)
    points_per_match: int = Field(21, ge=1)


class IndeterminateRequest(BaseModel):
    schedule: List[RoundIn]
    round_number: int = Field(..., ge=1)
