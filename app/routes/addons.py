import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_addon_store
from app.core.errors import NotFoundError
from app.schemas.addons import AddonCreate, AddonResponse, AddonUpdate
from app.services.catalog_store import AddonStore
from app.services.validation import CLEAR, ADDON_TITLE

router = APIRouter(tags=["addons"])
logger = logging.getLogger(__name__)


@router.get("/{category_id}/addons", response_model=List[AddonResponse])
async def list_addons(category_id: int, store: AddonStore = Depends(get_addon_store)):
    return store.list_by_parent(category_id)


@router.get("/{category_id}/addons/{addon_id}", response_model=AddonResponse)
async def get_addon(category_id: int, addon_id: int, store: AddonStore = Depends(get_addon_store)):
    addon = store.get_one(category_id, addon_id)
    if addon is None:
        raise NotFoundError(f"Addon {addon_id} not found in category {category_id}", title=ADDON_TITLE)
    return addon


@router.post("/{category_id}/addons", status_code=status.HTTP_201_CREATED)
async def create_addon(category_id: int, addon_data: AddonCreate, store: AddonStore = Depends(get_addon_store)):
    logger.info(f"Creating addon in category {category_id}: {addon_data.title}")
    addon_id = store.create(category_id, addon_data.model_dump(exclude_unset=True))
    return {"category_id": category_id, "addon_id": addon_id}


@router.patch("/{category_id}/addons/{addon_id}")
async def update_addon(
    category_id: int,
    addon_id: int,
    addon_data: AddonUpdate,
    store: AddonStore = Depends(get_addon_store)
):
    update_data = {
        field: CLEAR if value is None else value
        for field, value in addon_data.model_dump(exclude_unset=True).items()
    }
    updated = store.update(category_id, addon_id, update_data)
    return {"category_id": category_id, "addon_id": addon_id, "updated": updated}


@router.delete("/{category_id}/addons/{addon_id}")
async def delete_addon(category_id: int, addon_id: int, store: AddonStore = Depends(get_addon_store)):
    deleted = store.delete(category_id, addon_id)
    return {"category_id": category_id, "addon_id": addon_id, "deleted": deleted}
