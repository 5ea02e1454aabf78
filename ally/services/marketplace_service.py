"""
Marketplace Service - verified product catalog and simulated checkout.
"""

from firebase_admin import firestore
from typing import Any, Dict, List, Optional
import logging

from ally.core.errors import NotFoundError
from ally.utils.firestore_helpers import passthrough_fields, to_json_value, where_filter

logger = logging.getLogger(__name__)

PRODUCTS_COLLECTION = "Products"
ORDERS_COLLECTION = "Orders"
PRODUCTS_LIMIT = 20

ORDER_STATUS_PROCESSING = "Processing"
PAYMENT_STATUS_PAID = "PAID"

PRODUCT_FIELDS = ("name", "description", "price", "category", "imageUrl", "isVerified")


def _product_fields(doc_id: str, data: Dict) -> Dict:
    return {
        **passthrough_fields(data, PRODUCT_FIELDS),
        "id": doc_id,
        "name": to_json_value(data.get("name")),
        "description": to_json_value(data.get("description")),
        "price": to_json_value(data.get("price")),
        "category": to_json_value(data.get("category")),
        "image_url": to_json_value(data.get("imageUrl")),
        "is_verified": bool(data.get("isVerified", False)),
    }


class MarketplaceService:

    def __init__(self, db: Any):
        self.db = db

    def list_products(self) -> List[Dict]:
        """Up to PRODUCTS_LIMIT products flagged isVerified."""
        query = where_filter(self.db.collection(PRODUCTS_COLLECTION), "isVerified", "==", True)
        return [_product_fields(doc.id, doc.to_dict() or {}) for doc in query.limit(PRODUCTS_LIMIT).stream()]

    def get_product(self, product_id: str) -> Dict:
        doc = self.db.collection(PRODUCTS_COLLECTION).document(product_id).get()
        if not doc.exists:
            raise NotFoundError("Product not found.")
        return _product_fields(doc.id, doc.to_dict() or {})

    def checkout(self, user_id: str, items: Optional[List[Dict]], total_amount: Optional[float]) -> Dict:
        """
        Create an order and report a simulated payment.

        There is no payment provider, inventory check or idempotency key:
        every call writes a new order and reports PAID.
        """
        order_ref = self.db.collection(ORDERS_COLLECTION).document()
        order_ref.set({
            "userId": user_id,
            "items": items,
            "totalAmount": total_amount,
            "status": ORDER_STATUS_PROCESSING,
            "createdAt": firestore.SERVER_TIMESTAMP,
        })

        logger.info(f"Order {order_ref.id} created for {user_id} (total={total_amount})")
        return {"order_id": order_ref.id, "payment_status": PAYMENT_STATUS_PAID}
