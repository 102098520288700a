from .contracts import ContractRepository, SqlContractRepository
from .invoices import InvoiceRepository, SqlInvoiceRepository
from .quotes import QuoteRepository, SqlQuoteRepository

__all__ = [
    "ContractRepository",
    "InvoiceRepository",
    "QuoteRepository",
    "SqlContractRepository",
    "SqlInvoiceRepository",
    "SqlQuoteRepository",
]
