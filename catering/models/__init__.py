# Import all models so SQLAlchemy can discover them

from catering.models.quote_request import QuoteRequestORM
from catering.models.invoice import InvoiceORM, InvoiceLineItemORM
from catering.models.contract import ContractORM
from catering.models.status_change import StatusChangeORM

__all__ = [
    "QuoteRequestORM",
    "InvoiceORM",
    "InvoiceLineItemORM",
    "ContractORM",
    "StatusChangeORM",
]
