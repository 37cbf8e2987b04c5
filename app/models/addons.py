from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Addon(Base):
    __tablename__ = "addons"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    addon_id = Column(Integer, nullable=False)  # Sequence per category (1, 2, 3...)
    title = Column(String(100), nullable=False)
    cost = Column(Numeric(10, 2), nullable=False)
    sku = Column(String(50), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category", back_populates="addons")

    __table_args__ = (
        UniqueConstraint('category_id', 'addon_id', name='uq_category_addon_id'),
    )
