# app/utils/goals.py
from typing import Dict, Optional, Sequence
import uuid

from app.models.goal import Goal, GoalContribution
from app.models.product import Product
from app.schemas.goal import ContributionRead, GoalDetail, GoalProgress, GoalRead, ProductSummary
from app.utils.money import progress_percentage


def describe_goal(goal: Goal, product: Optional[Product] = None) -> GoalProgress:
    """Goal with its product summary, rounded progress and what is still missing."""
    base = GoalRead.model_validate(goal).model_dump(exclude={"product"})
    return GoalProgress(
        **base,
        product=ProductSummary.model_validate(product) if product is not None else None,
        progress_percentage=progress_percentage(goal.current_amount, goal.target_amount),
        remaining_amount=max(0, goal.target_amount - goal.current_amount),
    )


def describe_goals(goals: Sequence[Goal], products: Dict[uuid.UUID, Product]):
    return [describe_goal(goal, products.get(goal.product_id)) for goal in goals]


def describe_goal_detail(
    goal: Goal,
    product: Optional[Product],
    contributions: Sequence[GoalContribution],
) -> GoalDetail:
    progress = describe_goal(goal, product)
    return GoalDetail(
        **progress.model_dump(exclude={"product"}),
        product=progress.product,
        contributions=[ContributionRead.model_validate(c) for c in contributions],
    )
