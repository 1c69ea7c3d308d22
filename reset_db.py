# Drops and recreates every table, then reseeds the quotes.
import logging

import main  # noqa: F401  registers every model on Base
from app.core.database import Base, SessionLocal, engine
from app.quotes.db import seed_quotes

logger = logging.getLogger(__name__)


def reset_database():
    logger.warning("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    logger.info("Recreating tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_quotes(db)
    finally:
        db.close()
    logger.info("Tables recreated successfully.")


if __name__ == "__main__":
    reset_database()
