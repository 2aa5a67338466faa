import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Unset means every HTTP-triggered generation draws a fresh seed
_seed = os.getenv("SCHEDULER_SEED")
SCHEDULER_SEED = int(_seed) if _seed not in (None, "") else None

PARTNER_REPEAT_PENALTY = _int_env("PARTNER_REPEAT_PENALTY", 10)
OPPONENT_REPEAT_PENALTY = _int_env("OPPONENT_REPEAT_PENALTY", 5)
MATCHUP_REPEAT_PENALTY = _int_env("MATCHUP_REPEAT_PENALTY", 1000)
SKILL_GAP_WEIGHT = _int_env("SKILL_GAP_WEIGHT", 2)

REST_RULE = os.getenv("REST_RULE", "false").lower() in ("1", "true", "yes", "on")
