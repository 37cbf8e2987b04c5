from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Plan(Base):
    __tablename__ = "plans"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    plan_id = Column(Integer, nullable=False)  # Sequence per category (1, 2, 3...)
    name = Column(String(100), nullable=True)
    min_cost = Column(Numeric(10, 2), nullable=True)
    max_cost = Column(Numeric(10, 2), nullable=True)

    # Tier 1 is mandatory, tier 2 only when a term is given
    tier1_term = Column(String(50), nullable=False)
    tier1_cost = Column(Numeric(10, 2), nullable=False)
    tier1_sku = Column(String(50), nullable=False)
    tier2_term = Column(String(50), nullable=True)
    tier2_cost = Column(Numeric(10, 2), nullable=True)
    tier2_sku = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category", back_populates="plans")

    # Composite unique constraint: plan_id must be unique within a category
    __table_args__ = (
        UniqueConstraint('category_id', 'plan_id', name='uq_category_plan_id'),
    )
