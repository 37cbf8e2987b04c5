from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class AddonBase(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: Optional[str] = Field(None, description="Addon title (required, max 100 characters)")
    cost: Optional[str] = Field(None, description="Addon cost (required)")
    sku: Optional[str] = Field(None, description="Addon SKU (required)")


class AddonCreate(AddonBase):
    pass


class AddonUpdate(AddonBase):
    pass


class AddonResponse(BaseModel):
    category_id: int
    addon_id: int
    title: str
    cost: Decimal
    sku: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
