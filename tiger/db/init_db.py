# tiger/db/init_db.py
import logging

from tiger.db.session import Base, engine
import tiger.db.models  # noqa: F401

logger = logging.getLogger(__name__)


def init():
    logger.info("Creating tables (if not exist)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init()
