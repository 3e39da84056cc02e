# pos_api/routers/cart.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.schemas.cart import CartQuoteRequest, CartQuoteResponse
from pos_api.services.cart import quote_cart

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.post("/quote", response_model=CartQuoteResponse)
def get_cart_quote(
    cart_data: CartQuoteRequest,
    db: Session = Depends(get_db),
):
    return quote_cart(db, [entry.model_dump() for entry in cart_data.entries])
