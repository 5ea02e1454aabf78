"""
Marketplace product and order models.
"""

from typing import Any, Dict, List, Optional

from ally.models.base import CamelModel, StoredDocumentModel


class ProductResponse(StoredDocumentModel):
    id: str
    name: Any = None
    description: Any = None
    price: Any = None
    category: Any = None
    image_url: Any = None
    is_verified: bool = False


class CheckoutRequest(CamelModel):
    items: Optional[List[Dict[str, Any]]] = None
    total_amount: Optional[float] = None


class CheckoutResponse(CamelModel):
    message: str
    order_id: str
    payment_status: str
