import logging

from sqlmodel import SQLModel, create_engine
#need to import all models to proper create tables in db
from salesdesk.models.client import Client  # noqa: F401
from salesdesk.models.product import Product  # noqa: F401
from salesdesk.models.order import Order, OrderDetail  # noqa: F401
from salesdesk.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI), echo=settings.SQL_ECHO, pool_pre_ping=True)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)
    logger.info(f"Tables ready on {settings.DATABASE_HOST}:{settings.DATABASE_PORT}/{settings.DATABASE_NAME}")
