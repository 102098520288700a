from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from catering.db import get_db
from catering.repositories.contracts import SqlContractRepository
from catering.repositories.invoices import SqlInvoiceRepository
from catering.repositories.quotes import SqlQuoteRepository
from catering.services.contracts import ContractService
from catering.services.estimate_service import EstimateService
from catering.services.functions_client import FunctionsClient, get_functions_client


def get_quote_repository(db: Session = Depends(get_db)) -> SqlQuoteRepository:
    return SqlQuoteRepository(db)


def get_estimate_service(
    db: Session = Depends(get_db),
    functions: FunctionsClient = Depends(get_functions_client),
) -> EstimateService:
    # one Session for both repositories, see EstimateService
    return EstimateService(SqlQuoteRepository(db), SqlInvoiceRepository(db), functions)


def get_contract_service(
    db: Session = Depends(get_db),
    functions: FunctionsClient = Depends(get_functions_client),
) -> ContractService:
    return ContractService(SqlInvoiceRepository(db), SqlContractRepository(db), functions)
