from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class PlanBase(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, description="Plan name (max 100 characters)")
    min_cost: Optional[str] = Field(None, description="Minimum cost")
    max_cost: Optional[str] = Field(None, description="Maximum cost")
    tier1_term: Optional[str] = Field(None, description="Tier 1 term (required)")
    tier1_cost: Optional[str] = Field(None, description="Tier 1 cost (required)")
    tier1_sku: Optional[str] = Field(None, description="Tier 1 SKU (required)")
    tier2_term: Optional[str] = Field(None, description="Tier 2 term; makes tier 2 cost and SKU required")
    tier2_cost: Optional[str] = None
    tier2_sku: Optional[str] = None


class PlanCreate(PlanBase):
    pass


class PlanUpdate(PlanBase):
    """Only fields that are sent are updated; null clears an optional field"""
    pass


class PlanResponse(BaseModel):
    category_id: int
    plan_id: int
    name: Optional[str] = None
    min_cost: Optional[Decimal] = None
    max_cost: Optional[Decimal] = None
    tier1_term: str
    tier1_cost: Decimal
    tier1_sku: str
    tier2_term: Optional[str] = None
    tier2_cost: Optional[Decimal] = None
    tier2_sku: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
