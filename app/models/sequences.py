from sqlalchemy import Column, Integer, String, ForeignKey

from app.database import Base


class CategorySequence(Base):
    """
    Last local id handed out per (category, scope).
    Scope is the child table kind: "plan" or "addon".
    """
    __tablename__ = "category_sequences"

    category_id = Column(Integer, ForeignKey("categories.id"), primary_key=True)
    scope = Column(String(20), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
