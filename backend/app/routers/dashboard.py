"""Dashboard statistics routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import get_session_context
from app.schemas.common import ApiResponse
from app.schemas.dashboard import StatCardRead
from app.services.dashboard import dashboard_cards
from app.services.session import SessionContext

router = APIRouter()


@router.get("/dashboard/stats", response_model=ApiResponse[list[StatCardRead]])
def get_dashboard_stats(
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> ApiResponse[list[StatCardRead]]:
    cards = dashboard_cards(db, context)
    return ApiResponse(data=[StatCardRead.model_validate(card) for card in cards])
