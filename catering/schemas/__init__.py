from .invoice import (
    InvoiceOut,
    LineItem,
    LineItemCreate,
    LineItemOut,
    LineItemUpdate,
    PricingRequest,
)
from .quote_request import QuoteRequest, QuoteRequestCreate, ServiceType

__all__ = [
    "InvoiceOut",
    "LineItem",
    "LineItemCreate",
    "LineItemOut",
    "LineItemUpdate",
    "PricingRequest",
    "QuoteRequest",
    "QuoteRequestCreate",
    "ServiceType",
]
