import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_plan_store
from app.core.errors import NotFoundError
from app.schemas.plans import PlanCreate, PlanResponse, PlanUpdate
from app.services.catalog_store import PlanStore
from app.services.validation import CLEAR, PLAN_TITLE

router = APIRouter(tags=["plans"])
logger = logging.getLogger(__name__)


@router.get("/{category_id}/plans", response_model=List[PlanResponse])
async def list_plans(category_id: int, store: PlanStore = Depends(get_plan_store)):
    return store.list_by_parent(category_id)


@router.get("/{category_id}/plans/{plan_id}", response_model=PlanResponse)
async def get_plan(category_id: int, plan_id: int, store: PlanStore = Depends(get_plan_store)):
    plan = store.get_one(category_id, plan_id)
    if plan is None:
        raise NotFoundError(f"Plan {plan_id} not found in category {category_id}", title=PLAN_TITLE)
    return plan


@router.post("/{category_id}/plans", status_code=status.HTTP_201_CREATED)
async def create_plan(category_id: int, plan_data: PlanCreate, store: PlanStore = Depends(get_plan_store)):
    logger.info(f"Creating plan in category {category_id}: {plan_data.name}")
    plan_id = store.create(category_id, plan_data.model_dump(exclude_unset=True))
    return {"category_id": category_id, "plan_id": plan_id}


@router.patch("/{category_id}/plans/{plan_id}")
async def update_plan(
    category_id: int,
    plan_id: int,
    plan_data: PlanUpdate,
    store: PlanStore = Depends(get_plan_store)
):
    # An explicit null clears the column, a missing key leaves it alone
    update_data = {
        field: CLEAR if value is None else value
        for field, value in plan_data.model_dump(exclude_unset=True).items()
    }
    updated = store.update(category_id, plan_id, update_data)
    return {"category_id": category_id, "plan_id": plan_id, "updated": updated}


@router.delete("/{category_id}/plans/{plan_id}")
async def delete_plan(category_id: int, plan_id: int, store: PlanStore = Depends(get_plan_store)):
    deleted = store.delete(category_id, plan_id)
    return {"category_id": category_id, "plan_id": plan_id, "deleted": deleted}
