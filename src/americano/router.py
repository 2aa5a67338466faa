import logging
import random
from dataclasses import asdict, replace

from fastapi import APIRouter, HTTPException

import settings
from americano.functions import generate_round_matchups, reshuffle_match
from americano.models import MatchStatus, Player, PlayerStatus, Policy, generate_id
from americano.planning import match_duration_minutes, recommend_rounds, skill_label, unique_player_name
from americano.results import clamp_score, record_match_result
from americano.schedule import generate_schedule, regenerate_schedule
from americano.schemas import (
    NewPlayersRequest, PlanRequest, RegenerateRequest, ReshuffleRequest, RosterRequest,
    RoundRequest, ScheduleRequest, ScoreRequest, default_weights,
)
from americano.selection import validate_mixed_roster

log = logging.getLogger(__name__)

router = APIRouter(prefix='/americano', tags=['Американо'])

# -- Helpers -------------------------------------------------------------------

def _rng() -> random.Random:
    return random.Random(settings.SCHEDULER_SEED)


def _check_mixed(policy: Policy, players: list[Player]):
    if policy != Policy.MIXED:
        return
    error = validate_mixed_roster(players)
    if error:
        raise HTTPException(status_code=400, detail=error)


def _round_to_dict(rnd) -> dict:
    return asdict(rnd) | {"completed": rnd.completed}


# Routes

@router.post("/players")
async def add_players(body: NewPlayersRequest):
    names = [n.strip() for n in body.player_names.split("\n") if n.strip()]
    if not names:
        raise HTTPException(status_code=400, detail="Введите хотя бы одно имя")

    taken = [p.name for p in body.existing if p.status != PlayerStatus.REMOVED]
    created = []
    for name in names:
        unique = unique_player_name(name, taken)
        taken.append(unique)
        player = Player(
            id=generate_id(), name=unique, skill=body.skill, sex=body.sex,
            joined_at_round=body.current_round,
        )
        created.append(asdict(player) | {"skill_label": skill_label(player.skill)})
    return {"players": created}


@router.post("/round")
async def round_matchups(body: RoundRequest):
    players = [p.to_player() for p in body.players]
    _check_mixed(body.policy, players)

    matches, sitting_out = generate_round_matchups(
        players, body.courts, body.policy,
        [r.to_round() for r in body.prior_rounds], body.round_number,
        weights=default_weights(), rest_rule=body.rest_rule, rng=_rng(),
    )
    return {
        "round_number": body.round_number,
        "matches": [asdict(m) for m in matches],
        "sitting_out": sitting_out,
    }


@router.post("/schedule")
async def schedule(body: ScheduleRequest):
    players = [p.to_player() for p in body.players]
    config = body.config.to_config()
    _check_mixed(config.policy, players)

    rounds = generate_schedule(
        players, config, [r.to_round() for r in body.existing_schedule],
        body.from_round, rng=_rng(),
    )
    return {"rounds": [_round_to_dict(r) for r in rounds]}


@router.post("/schedule/regenerate")
async def schedule_regenerate(body: RegenerateRequest):
    players = [p.to_player() for p in body.players]
    config = body.config.to_config()
    _check_mixed(config.policy, players)

    rounds = regenerate_schedule(
        players, config, [r.to_round() for r in body.existing_schedule],
        body.current_round, rng=_rng(),
    )
    log.info("Schedule regenerated from round %d", body.current_round)
    return {"rounds": [_round_to_dict(r) for r in rounds]}


@router.post("/reshuffle")
async def reshuffle(body: ReshuffleRequest):
    match = reshuffle_match(
        [p.to_player() for p in body.players], body.policy, body.candidate_pool,
        body.court, [r.to_round() for r in body.prior_rounds],
        weights=default_weights(), rng=_rng(),
    )
    if match is None:
        raise HTTPException(status_code=400, detail="Недостаточно свободных игроков для корта")
    return {"match": asdict(match)}


@router.post("/validate-mixed")
async def validate_mixed(body: RosterRequest):
    return {"error": validate_mixed_roster([p.to_player() for p in body.players])}


@router.post("/plan")
async def plan(body: PlanRequest):
    recommendation = recommend_rounds(
        body.active_players, body.courts, body.session_minutes, body.points_per_match,
    )
    return asdict(recommendation) | {
        "match_minutes": match_duration_minutes(body.points_per_match),
    }


@router.post("/score")
async def score(body: ScoreRequest):
    match = body.match.to_match()
    if match.completed:
        raise HTTPException(status_code=400, detail="Матч уже завершён")

    score_a, score_b = clamp_score(body.score_a, body.score_b, body.points_per_match)
    match = replace(match, score_a=score_a, score_b=score_b, status=MatchStatus.COMPLETED)
    players = record_match_result([p.to_player() for p in body.players], match)
    return {
        "match": asdict(match),
        "players": [asdict(p) for p in players],
    }
