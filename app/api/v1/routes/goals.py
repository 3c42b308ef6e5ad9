# app/api/v1/routes/goals.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.api.deps import get_current_user_id, get_ledger_service
from app.api.errors import raise_for_failure
from app.core.config import settings
from app.core.database import get_async_session
from app.crud.goal import get_contributions_for_goal, get_goal, get_goals_for_user
from app.crud.product import get_product, get_products_by_ids
from app.models.goal import GoalStatus
from app.schemas.base import Pagination
from app.schemas.goal import (
    ContributionRequest,
    ContributionResult,
    GoalCancellation,
    GoalCreate,
    GoalDetail,
    GoalList,
    GoalRead,
)
from app.services.ledger import LedgerService
from app.utils.goals import describe_goal_detail, describe_goals

router = APIRouter(prefix="/goals", tags=["goals"])

@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Start saving towards a product.

    - **product_id**: an available catalog product
    - **target_amount**: positive integer (paise)
    """
    result = await ledger.create_goal(user_id, goal_in.product_id, goal_in.target_amount)
    return raise_for_failure(result)

@router.get("", response_model=GoalList)
async def read_goals(
    status_filter: Optional[GoalStatus] = Query(None, alias="status"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    offset: int = Query(0, ge=0),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    limit = min(limit, settings.MAX_PAGE_SIZE)
    goals = await get_goals_for_user(
        user_id,
        db,
        status=status_filter.value if status_filter else None,
        limit=limit,
        offset=offset,
    )
    products = await get_products_by_ids((goal.product_id for goal in goals), db)
    return GoalList(
        goals=describe_goals(goals, products),
        pagination=Pagination(limit=limit, offset=offset, count=len(goals)),
    )

@router.get("/{goal_id}", response_model=GoalDetail)
async def read_goal(
    goal_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    goal = await get_goal(goal_id, db)
    if goal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Goal not found", "code": "GOAL_NOT_FOUND"},
        )
    if goal.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Access denied", "code": "FORBIDDEN"},
        )
    product = await get_product(goal.product_id, db)
    contributions = await get_contributions_for_goal(goal_id, db)
    return describe_goal_detail(goal, product, contributions)

@router.post("/{goal_id}/contribute", response_model=ContributionResult, status_code=status.HTTP_201_CREATED)
async def contribute_to_goal(
    goal_id: uuid.UUID,
    contribution_in: ContributionRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Move wallet funds into the goal; reaching the target completes it."""
    result = await ledger.contribute(user_id, goal_id, contribution_in.amount, contribution_in.notes)
    return raise_for_failure(result)

@router.post("/{goal_id}/complete", response_model=GoalRead)
async def complete_goal(
    goal_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    return raise_for_failure(await ledger.complete_goal(user_id, goal_id))

@router.post("/{goal_id}/cancel", response_model=GoalCancellation)
async def cancel_goal(
    goal_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Cancel an active goal; everything contributed goes back to the wallet."""
    return raise_for_failure(await ledger.cancel_goal(user_id, goal_id))
