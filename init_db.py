"""
Database initialization script
Creates the catalog tables (categories, plans, addons, counters, api keys)
"""
from app.database import engine, Base
import app.models  # noqa: F401
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def init_db():
    """Initialize database with all tables"""
    try:
        logger.info("Creating all database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info(f"Database tables created: {', '.join(sorted(Base.metadata.tables))}")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise

if __name__ == "__main__":
    init_db()
