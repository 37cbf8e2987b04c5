from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union
from decimal import Decimal
from datetime import datetime


class CategoryBase(BaseModel):
    """Base schema for category data; content rules are enforced by the store"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, description="Category name")
    ts_flag: Optional[Union[bool, str]] = Field(None, description="Tax surcharge applies")
    ts_percent: Optional[str] = Field(None, description="Tax surcharge percentage")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category"""
    pass


class CategoryUpdate(CategoryBase):
    """Schema for updating an existing category"""
    pass


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: int = Field(..., description="Category ID")
    name: str
    ts_flag: bool
    ts_percent: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
