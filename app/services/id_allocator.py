"""
Per-category identifier allocation for plans and addons.

Each category keeps one counter row per child kind in category_sequences.
Allocation bumps the counter with a single UPDATE inside the caller's
transaction, which holds the row lock (PostgreSQL) or the write lock (SQLite)
until the insert that uses the id is committed. Ids are never handed out
twice for the same category, even after deletes.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.addons import Addon
from app.models.plans import Plan
from app.models.sequences import CategorySequence

logger = logging.getLogger(__name__)

SCOPES = {
    "plan": (Plan, Plan.plan_id),
    "addon": (Addon, Addon.addon_id),
}


class IdAllocator:
    def __init__(self, db: Session):
        self.db = db

    def register(self, category_id: int) -> None:
        """Create the counter rows for a freshly inserted category"""
        for scope in SCOPES:
            self.db.add(CategorySequence(category_id=category_id, scope=scope, last_value=0))
        self.db.flush()

    def next_local_id(self, scope: str, category_id: int) -> int:
        if scope not in SCOPES:
            raise ValueError(f"Unknown id scope: {scope}")

        updated = self.db.query(CategorySequence).filter(
            CategorySequence.category_id == category_id,
            CategorySequence.scope == scope
        ).update(
            {CategorySequence.last_value: CategorySequence.last_value + 1},
            synchronize_session=False
        )

        if not updated:
            # Categories created before the counter table existed
            return self._seed(scope, category_id)

        next_id = self.db.query(CategorySequence.last_value).filter(
            CategorySequence.category_id == category_id,
            CategorySequence.scope == scope
        ).scalar()
        logger.info(f"Next {scope} id for category {category_id}: {next_id}")
        return next_id

    def resync(self, scope: str, category_id: int) -> int:
        """
        Move the counter up to the highest id already stored for the category.

        Rows written without going through the counter (imports, manual fixes)
        otherwise make every later allocation collide. Returns that highest id.
        """
        if scope not in SCOPES:
            raise ValueError(f"Unknown id scope: {scope}")

        current = self._highest(scope, category_id)
        updated = self.db.query(CategorySequence).filter(
            CategorySequence.category_id == category_id,
            CategorySequence.scope == scope,
            CategorySequence.last_value < current
        ).update({CategorySequence.last_value: current}, synchronize_session=False)

        if updated:
            logger.warning(f"Resynced {scope} counter for category {category_id} to {current}")
        return current

    def _highest(self, scope: str, category_id: int) -> int:
        model, column = SCOPES[scope]
        return self.db.query(func.max(column)).filter(
            model.category_id == category_id
        ).scalar() or 0

    def _seed(self, scope: str, category_id: int) -> int:
        next_id = self._highest(scope, category_id) + 1
        self.db.add(CategorySequence(category_id=category_id, scope=scope, last_value=next_id))
        self.db.flush()
        logger.info(f"Seeded {scope} counter for category {category_id} at {next_id}")
        return next_id
