"""Plan suggestion API routes."""

from fastapi import APIRouter, Depends

from ..deps import get_plan_service
from ..middleware.auth import get_current_user
from ..schemas import PlanSuggestionResponse
from ...services.authorization import CurrentUser
from ...services.plan_service import PlanService


router = APIRouter(prefix="/plan", tags=["plan"])


@router.get("/next", response_model=PlanSuggestionResponse)
def next_plan(
    current_user: CurrentUser = Depends(get_current_user),
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanSuggestionResponse:
    """Suggest the caller's next load and rep target."""
    suggestion = plan_service.next_suggestion(current_user.user_id)
    return PlanSuggestionResponse.from_suggestion(suggestion)
