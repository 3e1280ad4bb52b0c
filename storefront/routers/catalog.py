# storefront/routers/catalog.py
# Catalog endpoints: products, reviews, orders and the session wishlist.
# Every handler issues a single statement through Database; storage errors
# propagate to the app-level SQLAlchemyError handler.

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, insert, select, update

from storefront.database import Database, get_db
from storefront.models import orders, products, reviews, wishlist
from storefront.schemas import OrderIn, ProductIn, ReviewIn, WishlistIn
from storefront.utils import generate_product_id, rename_keys

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])

_PRODUCT_FIELDS = {"offer_price": "offerPrice"}
DELETED = {"message": "success"}


def _product_out(row):
    return rename_keys(row, _PRODUCT_FIELDS)


def _product_values(payload: ProductIn) -> dict:
    return payload.model_dump(exclude={"id"})


# -------------------- Products --------------------

@router.get("/products")
def list_products(db: Database = Depends(get_db)):
    rows = db.query_many(select(products).order_by(products.c.name))
    return [_product_out(r) for r in rows]


@router.get("/products/{product_id}")
def get_product(product_id: str, db: Database = Depends(get_db)):
    row = db.query_one(select(products).where(products.c.id == product_id))
    if row is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _product_out(row)


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn, db: Database = Depends(get_db)):
    values = _product_values(payload)
    values["id"] = payload.id or generate_product_id()
    result = db.execute(insert(products).values(**values).returning(products))
    return _product_out(result.row)


@router.put("/products/{product_id}")
def update_product(product_id: str, payload: ProductIn, db: Database = Depends(get_db)):
    stmt = (
        update(products)
        .where(products.c.id == product_id)
        .values(**_product_values(payload))
        .returning(products)
    )
    result = db.execute(stmt)
    if result.row is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _product_out(result.row)


@router.delete("/products/{product_id}")
def delete_product(product_id: str, db: Database = Depends(get_db)):
    db.execute(delete(products).where(products.c.id == product_id))
    return DELETED


# -------------------- Reviews --------------------

@router.get("/reviews/product/{product_id}")
def list_product_reviews(product_id: str, db: Database = Depends(get_db)):
    """Public listing: approved reviews only, newest first."""
    stmt = (
        select(reviews)
        .where(reviews.c.product_id == product_id, reviews.c.status == "approved")
        .order_by(reviews.c.date.desc(), reviews.c.id.desc())
    )
    return db.query_many(stmt)


@router.get("/reviews/pending")
def list_pending_reviews(db: Database = Depends(get_db)):
    """Moderation queue."""
    stmt = select(reviews).where(reviews.c.status == "pending").order_by(reviews.c.date.desc(), reviews.c.id.desc())
    return db.query_many(stmt)


@router.post("/reviews", status_code=status.HTTP_201_CREATED)
def create_review(payload: ReviewIn, db: Database = Depends(get_db)):
    # New reviews always start pending
    stmt = insert(reviews).values(
        product_id=payload.product_id,
        rating=payload.rating,
        comment=payload.comment,
        author=payload.author_name,
        status="pending",
    ).returning(reviews)
    return db.execute(stmt).row


@router.put("/reviews/{review_id}/approve")
def approve_review(review_id: int, db: Database = Depends(get_db)):
    stmt = update(reviews).where(reviews.c.id == review_id).values(status="approved").returning(reviews)
    result = db.execute(stmt)
    if result.row is None:
        raise HTTPException(status_code=404, detail="Review not found")
    logger.info(f"Review #{review_id} approved")
    return result.row


@router.delete("/reviews/{review_id}")
def delete_review(review_id: int, db: Database = Depends(get_db)):
    db.execute(delete(reviews).where(reviews.c.id == review_id))
    return DELETED


# -------------------- Orders --------------------

@router.post("/orders", status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderIn, db: Database = Depends(get_db)):
    stmt = insert(orders).values(
        items=payload.items,
        total=payload.total,
        customer_info=payload.customer_info,
    ).returning(orders)
    result = db.execute(stmt)
    logger.info(f"Order #{result.generated_id} stored (total={payload.total})")
    return result.row


@router.get("/orders/{order_id}")
def get_order(order_id: int, db: Database = Depends(get_db)):
    row = db.query_one(select(orders).where(orders.c.id == order_id))
    if row is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return row


# -------------------- Wishlist --------------------

@router.get("/wishlist/{session_id}")
def list_wishlist(session_id: str, db: Database = Depends(get_db)):
    stmt = (
        select(
            wishlist.c.id,
            wishlist.c.product_id,
            products.c.name,
            products.c.price,
            products.c.description,
            products.c.images,
            products.c.stock,
            products.c.category,
        )
        .join(products, wishlist.c.product_id == products.c.id)
        .where(wishlist.c.session_id == session_id)
        .order_by(wishlist.c.id)
    )
    return {"message": "success", "data": db.query_many(stmt)}


@router.post("/wishlist", status_code=status.HTTP_201_CREATED)
def add_to_wishlist(payload: WishlistIn, db: Database = Depends(get_db)):
    # None when the (session_id, product_id) pair is already saved
    row = db.insert_or_ignore(wishlist, payload.model_dump(), conflict=("session_id", "product_id"))
    return {"message": "success", "data": row}


@router.delete("/wishlist/{entry_id}")
def remove_from_wishlist(entry_id: int, db: Database = Depends(get_db)):
    db.execute(delete(wishlist).where(wishlist.c.id == entry_id))
    return DELETED
