from fastapi import APIRouter, HTTPException, Request, Response, status
from typing import List

from salesdesk.api.deps import SessionDep
from salesdesk.core import product_crud
from salesdesk.models.product import (
    ProductCreate,
    ProductDisplay,
    ProductRead,
    ProductUpdate,
)

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={
        404: {"description": "Not Found - resource does not exist."},
        400: {"description": "Bad Request - invalid input or business rule violation."}
    }
)

@router.get(
    "/",
    response_model=List[ProductDisplay],
    summary="List Products",
    description=(
        "Returns every product with display defaults applied: a missing or empty "
        "description becomes \"No description\" and a missing price becomes 0."
    ),
)
def list_products(session: SessionDep):
    """
    Business Rules:
    - Returns HTTP 404 when there are no products.
    """
    products = product_crud.list_products(session=session)
    if not products:
        raise HTTPException(status_code=404, detail="No products found.")
    return products

@router.get(
    "/search/price/{value}",
    response_model=List[ProductDisplay],
    summary="Products Above a Price",
    description="Returns products whose price is strictly greater than `value`, with display defaults applied.",
    openapi_extra={
        "x-examples": {
            "Above 100": {
                "summary": "Products costing more than 100",
                "value": {"value": 100}
            }
        }
    }
)
def list_products_above_price(session: SessionDep, value: float):
    """
    Business Rules:
    - Products without a price never match.
    - Returns HTTP 404 when nothing matches.
    """
    products = product_crud.list_products_above_price(session=session, min_price=value)
    if not products:
        raise HTTPException(
            status_code=404,
            detail=f"No products found with a price greater than '{value:.15g}'",
        )
    return products

@router.get(
    "/mostExpensive",
    response_model=ProductDisplay,
    summary="Most Expensive Product",
    description="Returns the product with the highest price, with display defaults applied.",
)
def read_most_expensive_product(session: SessionDep):
    """
    Business Rules:
    - A missing price ranks as 0.
    - On a tie the lowest `product_id` wins.
    - Returns HTTP 404 when there are no products.
    """
    product = product_crud.get_most_expensive_product(session=session)
    if product is None:
        raise HTTPException(status_code=404, detail="No products found.")
    return product

@router.get(
    "/averagePrice",
    response_model=float,
    summary="Average Price",
    description="Returns the mean price over products that have a price, as a bare JSON number.",
)
def read_average_price(session: SessionDep):
    """
    Business Rules:
    - Products without a price are left out of both the sum and the count.
    - Returns HTTP 404 only when no product has a price; an average of 0 is returned as 0.
    """
    average = product_crud.get_average_price(session=session)
    if average is None:
        raise HTTPException(status_code=404, detail="No products found.")
    return average

@router.get(
    "/noDescription",
    response_model=List[ProductRead],
    summary="Products without Description",
    description="Returns products whose description is missing or empty, exactly as stored.",
)
def list_products_without_description(session: SessionDep):
    """
    Business Rules:
    - No display defaults are applied here, the description is returned as stored (null or "").
    - Returns HTTP 404 when every product has a description.
    """
    products = product_crud.list_products_without_description(session=session)
    if not products:
        raise HTTPException(status_code=404, detail="No products found without a description.")
    return products

@router.post(
    "/",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    description="Creates a product. The id is assigned by the database unless supplied.",
    openapi_extra={
        "x-examples": {
            "Create": {
                "summary": "Create wireless headphones",
                "value": {
                    "name": "Wireless Headphones",
                    "description": "Over-ear, noise cancelling",
                    "price": 149.99
                }
            }
        }
    }
)
def create_product(
    session: SessionDep,
    request: Request,
    response: Response,
    product_in: ProductCreate,
):
    """
    Business Rules:
    - `price`, when given, must not be negative (HTTP 422).
    - A supplied `product_id` that is already taken returns HTTP 400.
    """
    if product_in.product_id is not None and product_crud.product_exists(
        session=session, product_id=product_in.product_id
    ):
        raise HTTPException(status_code=400, detail="Product with this id already exists")

    db_product = product_crud.create_product(session=session, product_create=product_in)
    response.headers["Location"] = str(request.url_for("read_product", product_id=db_product.product_id))
    return db_product

@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get Product",
    description="Retrieves a single product by its id, exactly as stored.",
)
def read_product(session: SessionDep, product_id: int):
    product = product_crud.get_product(session=session, product_id=product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace Product",
    description="Replaces every field of an existing product.",
)
def update_product(session: SessionDep, product_id: int, product_in: ProductUpdate):
    """
    Business Rules:
    - The body `product_id` must equal the path id, otherwise HTTP 400.
    - `price`, when given, must not be negative (HTTP 422).
    - Full replacement: omitted optional fields are cleared.
    """
    if product_in.product_id != product_id:
        raise HTTPException(status_code=400, detail="Product id mismatch")

    product = product_crud.replace_product(session=session, product_id=product_id, product_in=product_in)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return None

@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Product",
    description="Deletes a product that no order refers to.",
)
def delete_product(session: SessionDep, product_id: int):
    """
    Business Rules:
    - Returns HTTP 404 if the product does not exist.
    - Returns HTTP 400 if any order line refers to the product.
    """
    product = product_crud.get_product(session=session, product_id=product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    if product_crud.product_has_orders(session=session, product_id=product_id):
        raise HTTPException(status_code=400, detail="Product is referenced by existing orders")
    product_crud.delete_product(session=session, db_product=product)
    return None
