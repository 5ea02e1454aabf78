"""
Marketplace endpoints - verified products and simulated checkout.
"""

from typing import Any, List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
import logging

from ally.core.errors import AllyError, InternalError
from ally.dependencies import get_current_user_id, get_db, require_gate
from ally.models.base import validate_records
from ally.models.marketplace import CheckoutRequest, CheckoutResponse, ProductResponse
from ally.services.marketplace_service import MarketplaceService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/marketplace",
    tags=["Marketplace"],
    dependencies=[Depends(require_gate("marketplace"))],
)


@router.get("/products", response_model=List[ProductResponse])
async def list_products(db: Any = Depends(get_db)):
    try:
        products = await run_in_threadpool(MarketplaceService(db).list_products)
        return validate_records(ProductResponse, products)
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching products: {e}", exc_info=True)
        raise InternalError("Server error fetching products.")


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db: Any = Depends(get_db)):
    try:
        product = await run_in_threadpool(MarketplaceService(db).get_product, product_id)
        return ProductResponse(**product)
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching product details: {e}", exc_info=True)
        raise InternalError("Server error fetching product details.")


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    db: Any = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Create an order and return a simulated payment confirmation.

    Not idempotent: repeating a request creates another order.
    """
    try:
        result = await run_in_threadpool(
            MarketplaceService(db).checkout, user_id, request.items, request.total_amount
        )
        return CheckoutResponse(message="Order received. Payment simulation successful.", **result)
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error processing checkout: {e}", exc_info=True)
        raise InternalError("Server error during checkout.")
