import logging

from salesdesk.core.db import init_db
from salesdesk.core.logging import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    logger.info("Creating database tables")
    init_db()
    logger.info("Database tables created")


if __name__ == "__main__":
    main()
