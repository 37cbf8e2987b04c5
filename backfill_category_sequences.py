"""
Migration script to create category_sequences rows for existing categories
Seeds each plan/addon counter from the highest local id already in use
"""
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from app.database import engine as default_engine, Base
import app.models  # noqa: F401
import logging

logger = logging.getLogger(__name__)

CHILD_TABLES = (
    ("plan", "plans", "plan_id"),
    ("addon", "addons", "addon_id"),
)

def backfill_category_sequences(engine=None):
    """Create missing counter rows; existing counters are left alone"""
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine, tables=[Base.metadata.tables["category_sequences"]])
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    created = 0

    try:
        categories = db.execute(text("SELECT id FROM categories ORDER BY id")).fetchall()

        for category_row in categories:
            category_id = category_row[0]

            for scope, table, column in CHILD_TABLES:
                exists = db.execute(text("""
                    SELECT 1 FROM category_sequences
                    WHERE category_id = :category_id AND scope = :scope
                """), {"category_id": category_id, "scope": scope}).fetchone()
                if exists:
                    continue

                # Table and column names come from CHILD_TABLES, never from input
                last_value = db.execute(text(f"""
                    SELECT COALESCE(MAX({column}), 0) FROM {table}
                    WHERE category_id = :category_id
                """), {"category_id": category_id}).scalar()

                db.execute(text("""
                    INSERT INTO category_sequences (category_id, scope, last_value)
                    VALUES (:category_id, :scope, :last_value)
                """), {"category_id": category_id, "scope": scope, "last_value": last_value})
                logger.info(f"  Category {category_id} {scope} counter -> {last_value}")
                created += 1

        db.commit()
        logger.info(f"Backfill completed: {created} counter(s) created")
        return created

    except Exception as e:
        logger.error(f"Error during backfill: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting category_sequences backfill...")
    backfill_category_sequences()
    logger.info("Backfill script finished")
