"""
Category, plan and addon stores.

Stores are plain objects around a SQLAlchemy session. Every write validates
its input first, then runs inside one transaction that is committed on
success and rolled back on any failure.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import CatalogError, ConflictError, NotFoundError, ValidationError, map_db_exception
from app.models.addons import Addon
from app.models.categories import Category
from app.models.plans import Plan
from app.services.id_allocator import IdAllocator
from app.services.validation import (
    ADDON_TITLE,
    CATEGORY_TITLE,
    CLEAR,
    PLAN_TITLE,
    is_blank,
    parse_flag,
    to_decimal,
    validate_addon_add,
    validate_addon_update,
    validate_category_add,
    validate_category_update,
    validate_plan_add,
    validate_plan_update,
)

logger = logging.getLogger(__name__)


def build_update_set(data: dict, columns: tuple, numeric_columns: tuple = (), title: str = "Entry Error") -> dict:
    """
    Collect the columns an update should touch.

    Only keys that are present and non-empty end up in the result; CLEAR sets
    the column to NULL. Anything outside ``columns`` is ignored.
    """
    values = {}
    for column in columns:
        if column not in data:
            continue
        value = data[column]
        if value is CLEAR:
            values[column] = None
        elif is_blank(value):
            continue
        elif column in numeric_columns:
            try:
                values[column] = to_decimal(value)
            except ValueError:
                raise ValidationError(f"The {column} field is not a valid value.", title=title)
        else:
            values[column] = str(value).strip()
    return values


def _as_id(value, label: str, title: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}: {value!r}", title=title)


class BaseStore:
    title = "Catalog Database Error"

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except CatalogError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{self.title}: {str(e)}")
            raise map_db_exception(e, title=self.title) from e

    @contextmanager
    def _reading(self):
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"{self.title}: {str(e)}")
            raise map_db_exception(e, title=self.title) from e


class CategoryStore(BaseStore):
    title = "Category Database Error"

    def list_all(self) -> List[Category]:
        with self._reading():
            return self.db.query(Category).order_by(Category.id).all()

    def get(self, category_id) -> Optional[Category]:
        category_id = _as_id(category_id, "category id", CATEGORY_TITLE)
        with self._reading():
            return self.db.query(Category).filter(Category.id == category_id).first()

    def check_name_exists(self, name: str, exclude_id: int = None) -> bool:
        with self._reading():
            query = self.db.query(Category).filter(func.lower(Category.name) == name.strip().lower())
            if exclude_id is not None:
                query = query.filter(Category.id != exclude_id)
            return query.first() is not None

    def create(self, data: dict) -> Category:
        validate_category_add(data, self.check_name_exists)

        category = Category(
            name=str(data["name"]).strip(),
            ts_flag=parse_flag(data.get("ts_flag")),
            ts_percent=to_decimal(data.get("ts_percent")) or 0
        )
        with self._transaction():
            self.db.add(category)
            self.db.flush()
            IdAllocator(self.db).register(category.id)

        self.db.refresh(category)
        logger.info(f"Created category: {category.name} (ID: {category.id})")
        return category

    def update(self, category_id, data: dict) -> int:
        """Rename a category and change its surcharge settings; returns rows affected"""
        validate_category_update(
            category_id,
            data,
            lambda name: self.check_name_exists(name, exclude_id=_as_id(category_id, "category id", CATEGORY_TITLE))
        )
        category_id = _as_id(category_id, "category id", CATEGORY_TITLE)

        values = {"name": str(data["name"]).strip()}
        if not is_blank(data.get("ts_flag")):
            values["ts_flag"] = parse_flag(data["ts_flag"])
        if not is_blank(data.get("ts_percent")):
            values["ts_percent"] = to_decimal(data["ts_percent"])

        with self._transaction():
            count = self.db.query(Category).filter(Category.id == category_id).update(
                values, synchronize_session=False
            )
            if not count:
                raise NotFoundError("Unable to locate record", title=CATEGORY_TITLE)

        logger.info(f"Updated category {category_id}: {sorted(values)}")
        return count


class ChildStore(BaseStore):
    """Shared behaviour of the per-category child tables."""

    model = None
    scope = None
    local_key = None
    entry_title = None
    columns = ()
    numeric_columns = ()

    def validate_add(self, data: dict) -> None:
        raise NotImplementedError

    def validate_update(self, data: dict) -> None:
        raise NotImplementedError

    @property
    def _local_column(self):
        return getattr(self.model, self.local_key)

    def _scoped(self, category_id: int, local_id: int):
        return self.db.query(self.model).filter(
            self.model.category_id == category_id,
            self._local_column == local_id
        )

    def _ids(self, category_id, local_id=None):
        category_id = _as_id(category_id, "category id", self.entry_title)
        if local_id is None:
            return category_id, None
        return category_id, _as_id(local_id, f"{self.scope} id", self.entry_title)

    def list_by_parent(self, category_id) -> list:
        category_id, _ = self._ids(category_id)
        with self._reading():
            return self.db.query(self.model).filter(
                self.model.category_id == category_id
            ).order_by(self._local_column).all()

    def get_one(self, category_id, local_id):
        category_id, local_id = self._ids(category_id, local_id)
        with self._reading():
            return self._scoped(category_id, local_id).first()

    def create(self, category_id, data: dict) -> int:
        """Insert a child under ``category_id`` and return its local id"""
        self.validate_add(data)
        category_id, _ = self._ids(category_id)
        values = build_update_set(data, self.columns, self.numeric_columns, title=self.entry_title)

        try:
            with self._transaction():
                if self.db.get(Category, category_id) is None:
                    raise NotFoundError(f"Category with ID {category_id} not found", title=self.entry_title)
                new_id = IdAllocator(self.db).next_local_id(self.scope, category_id)
                record = self.model(category_id=category_id, **{self.local_key: new_id}, **values)
                self.db.add(record)
                self.db.flush()
        except ConflictError:
            # the rollback undid the counter bump too
            with self._transaction():
                IdAllocator(self.db).resync(self.scope, category_id)
            raise

        logger.info(f"Created {self.scope} {new_id} in category {category_id}")
        return new_id

    def update(self, category_id, local_id, data: dict) -> int:
        self.validate_update(data)
        category_id, local_id = self._ids(category_id, local_id)
        values = build_update_set(data, self.columns, self.numeric_columns, title=self.entry_title)
        if not values:
            logger.info(f"No {self.scope} fields to update for {category_id}/{local_id}")
            return 0

        with self._transaction():
            count = self._scoped(category_id, local_id).update(values, synchronize_session=False)

        logger.info(f"Updated {self.scope} {category_id}/{local_id}: {sorted(values)} ({count} row(s))")
        return count

    def delete(self, category_id, local_id) -> int:
        category_id, local_id = self._ids(category_id, local_id)
        with self._transaction():
            count = self._scoped(category_id, local_id).delete(synchronize_session=False)

        if count:
            logger.info(f"Deleted {self.scope} {category_id}/{local_id}")
        else:
            logger.warning(f"No {self.scope} {category_id}/{local_id} to delete")
        return count


class PlanStore(ChildStore):
    title = "Plan Database Error"
    entry_title = PLAN_TITLE
    model = Plan
    scope = "plan"
    local_key = "plan_id"
    columns = (
        "name", "min_cost", "max_cost",
        "tier1_term", "tier1_cost", "tier1_sku",
        "tier2_term", "tier2_cost", "tier2_sku",
    )
    numeric_columns = ("min_cost", "max_cost", "tier1_cost", "tier2_cost")

    def validate_add(self, data: dict) -> None:
        validate_plan_add(data)

    def validate_update(self, data: dict) -> None:
        validate_plan_update(data)


class AddonStore(ChildStore):
    title = "Addon Database Error"
    entry_title = ADDON_TITLE
    model = Addon
    scope = "addon"
    local_key = "addon_id"
    columns = ("title", "cost", "sku")
    numeric_columns = ("cost",)

    def validate_add(self, data: dict) -> None:
        validate_addon_add(data)

    def validate_update(self, data: dict) -> None:
        validate_addon_update(data)
