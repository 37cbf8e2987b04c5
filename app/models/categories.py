from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Category(Base):
    """
    Top level of the catalog hierarchy.
    Plans and addons are keyed by their parent category id.
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    ts_flag = Column(Boolean, nullable=False, default=False)  # Tax surcharge applies
    ts_percent = Column(Numeric(5, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    plans = relationship("Plan", back_populates="category", order_by="Plan.plan_id")
    addons = relationship("Addon", back_populates="category", order_by="Addon.addon_id")
