import random
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

import settings
from americano.functions import generate_round_matchups
from americano.models import Policy
from americano.schemas import IndeterminateRequest, RosterRequest, RoundRequest, default_weights
from mexicano.functions import calculate_standings, is_round_indeterminate

router = APIRouter(prefix='/mexicano', tags=['Мексикано'])


@router.post("/round")
async def mexicano_round(body: RoundRequest):
    prior_rounds = [r.to_round() for r in body.prior_rounds]
    if is_round_indeterminate(prior_rounds, body.round_number):
        raise HTTPException(status_code=400, detail="Предыдущий раунд ещё не завершён")

    matches, sitting_out = generate_round_matchups(
        [p.to_player() for p in body.players], body.courts, Policy.MEXICANO,
        prior_rounds, body.round_number,
        weights=default_weights(), rest_rule=body.rest_rule,
        rng=random.Random(settings.SCHEDULER_SEED),
    )
    return {
        "round_number": body.round_number,
        "matches": [asdict(m) for m in matches],
        "sitting_out": sitting_out,
    }


@router.post("/standings")
async def mexicano_standings(body: RosterRequest):
    return {"standings": calculate_standings([p.to_player() for p in body.players])}


@router.post("/indeterminate")
async def mexicano_indeterminate(body: IndeterminateRequest):
    schedule = [r.to_round() for r in body.schedule]
    return {
        "round_number": body.round_number,
        "indeterminate": is_round_indeterminate(schedule, body.round_number),
    }
