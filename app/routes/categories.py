import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_category_store
from app.core.errors import NotFoundError
from app.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.catalog_store import CategoryStore
from app.services.validation import CATEGORY_TITLE

router = APIRouter(tags=["categories"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[CategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="Get all categories"
)
async def get_all_categories(store: CategoryStore = Depends(get_category_store)):
    logger.info("Fetching all categories")
    return store.list_all()


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get category by ID"
)
async def get_category(category_id: int, store: CategoryStore = Depends(get_category_store)):
    category = store.get(category_id)
    if not category:
        logger.warning(f"Category with ID {category_id} not found")
        raise NotFoundError("Unable to locate record", title=CATEGORY_TITLE)
    return category


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new category"
)
async def create_category(category_data: CategoryCreate, store: CategoryStore = Depends(get_category_store)):
    logger.info(f"Creating new category: {category_data.name}")
    return store.create(category_data.model_dump(exclude_unset=True))


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Update category"
)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    store: CategoryStore = Depends(get_category_store)
):
    logger.info(f"Updating category with ID: {category_id}")
    store.update(category_id, category_data.model_dump(exclude_unset=True))
    return store.get(category_id)
