import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, col, func, or_, select

from salesdesk.models.order import OrderDetail
from salesdesk.models.product import Product, ProductCreate, ProductDisplay, ProductUpdate

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "No description"


def to_display(product: Product) -> ProductDisplay:
    """Fill in a missing or empty description and a missing price."""
    return ProductDisplay(
        product_id=product.product_id,
        name=product.name,
        description=product.description or DEFAULT_DESCRIPTION,
        price=product.price if product.price is not None else 0,
    )


def list_products(*, session: Session) -> List[ProductDisplay]:
    return [to_display(p) for p in session.exec(select(Product)).all()]


def list_products_above_price(*, session: Session, min_price: float) -> List[ProductDisplay]:
    statement = select(Product).where(col(Product.price) > min_price)
    return [to_display(p) for p in session.exec(statement).all()]


def get_most_expensive_product(*, session: Session) -> Optional[ProductDisplay]:
    # A missing price ranks as zero; ties go to the lowest product_id
    statement = (
        select(Product)
        .order_by(func.coalesce(Product.price, 0).desc(), col(Product.product_id))
        .limit(1)
    )
    product = session.exec(statement).first()
    if product is None:
        return None
    return to_display(product)


def get_average_price(*, session: Session) -> Optional[float]:
    """
    Mean price over products that have one.

    None means there was nothing to average, which is distinct from a
    genuine 0.0 average.
    """
    statement = select(func.avg(Product.price)).where(col(Product.price).is_not(None))
    average = session.exec(statement).one()
    if average is None:
        return None
    return float(average)


def list_products_without_description(*, session: Session) -> Sequence[Product]:
    statement = select(Product).where(
        or_(col(Product.description).is_(None), col(Product.description) == "")
    )
    return session.exec(statement).all()


def get_product(*, session: Session, product_id: int) -> Optional[Product]:
    return session.get(Product, product_id)


def product_exists(*, session: Session, product_id: int) -> bool:
    statement = select(Product.product_id).where(Product.product_id == product_id)
    return session.exec(statement).first() is not None


def product_has_orders(*, session: Session, product_id: int) -> bool:
    statement = select(OrderDetail.order_detail_id).where(OrderDetail.product_id == product_id)
    return session.exec(statement).first() is not None


def create_product(*, session: Session, product_create: ProductCreate) -> Product:
    db_product = Product.model_validate(product_create)
    session.add(db_product)
    session.commit()
    session.refresh(db_product)
    logger.info(f"Created product {db_product.product_id}")
    return db_product


def replace_product(*, session: Session, product_id: int, product_in: ProductUpdate) -> Optional[Product]:
    db_product = session.get(Product, product_id)
    if db_product is None:
        return None

    db_product.sqlmodel_update(product_in.model_dump())
    session.add(db_product)
    try:
        session.commit()
    except StaleDataError:
        session.rollback()
        if not product_exists(session=session, product_id=product_id):
            logger.warning(f"Product {product_id} vanished during update")
            return None
        raise
    session.refresh(db_product)
    logger.info(f"Updated product {product_id}")
    return db_product


def delete_product(*, session: Session, db_product: Product) -> None:
    product_id = db_product.product_id
    session.delete(db_product)
    session.commit()
    logger.info(f"Deleted product {product_id}")
