import logging

from fastapi import FastAPI

import settings
from americano.router import router as americano_router
from mexicano.router import router as mexicano_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(levelname)s: %(message)s',
)

app = FastAPI(title="Padel Court Scheduler")

app.include_router(americano_router)
app.include_router(mexicano_router)


@app.get("/")
async def index():
    return {"title": app.title, "policies": ["americano", "balanced", "mixed", "mexicano"]}
