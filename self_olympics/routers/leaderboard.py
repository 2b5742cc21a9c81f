from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from self_olympics.database.database import get_db
from self_olympics.schemas.leaderboard import LeaderboardEntry, LeaderboardResponse
from self_olympics.services.leaderboard_service import LeaderboardService

router = APIRouter()


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(response: Response, db: Session = Depends(get_db)):
    # always fresh; the UI refetches after every registration
    response.headers["Cache-Control"] = "no-store"
    countries = LeaderboardService.list_leaderboard(db)
    return LeaderboardResponse(
        leaderboard=[LeaderboardEntry.model_validate(country) for country in countries],
        total=len(countries),
    )
