from fastapi import FastAPI

from pursuit.config import settings
from pursuit.kernel.router import router as pursuit_router
from pursuit.logging_config import configure_logging

configure_logging(settings.log_level)

app = FastAPI(title="Pursuit", version="0.1.0")
app.include_router(pursuit_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "pursuit": {
            "objectives": "/pursuit/objectives",
            "objective": "/pursuit/objectives/{id}",
            "report": "/pursuit/objectives/{id}/report",
            "goals": "/pursuit/objectives/{id}/goals",
            "goal": "/pursuit/objectives/{id}/goals/{goal_id}",
            "goal_baseline": "/pursuit/objectives/{id}/goals/{goal_id}/baseline",
            "regular_goals": "/pursuit/objectives/{id}/regular_goals",
            "goal_value": "/pursuit/objectives/{id}/goals/{goal_id}/value",
            "goal_increment": "/pursuit/objectives/{id}/goals/{goal_id}/increment",
            "regular_goal_value": "/pursuit/objectives/{id}/regular_goals/{goal_id}/value",
            "budget_goal_value": "/pursuit/objectives/{id}/budget_goals/{goal_id}/value",
            "move": "/pursuit/objectives/{id}/{kind}/{goal_id}/move",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
