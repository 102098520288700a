# catering/routers/quotes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from catering.core.rate_limit import limiter
from catering.core.settings import settings
from catering.dependencies import get_estimate_service, get_quote_repository
from catering.repositories.quotes import QuoteRepository, quote_from_orm
from catering.schemas.invoice import LineItem, StatusUpdate
from catering.schemas.quote_request import (
    QuoteRequest,
    QuoteRequestCreate,
    QuoteRequestCreated,
    QuoteSummaryOut,
)
from catering.services.estimate_service import EstimateService
from catering.services.functions_client import FunctionsClient, get_functions_client
from catering.services.intake import submit_quote

router = APIRouter(tags=["quotes"])


@router.post("/quotes", response_model=QuoteRequestCreated, status_code=201)
@limiter.limit(settings.QUOTE_INTAKE_RATE_LIMIT)
def create_quote(
    request: Request,
    payload: QuoteRequestCreate,
    quotes: QuoteRepository = Depends(get_quote_repository),
    functions: FunctionsClient = Depends(get_functions_client),
):
    quote = submit_quote(payload, quotes, functions)
    return QuoteRequestCreated(id=quote.id, status=quote.status)


@router.get("/admin/quotes", response_model=List[QuoteSummaryOut])
def list_quotes(
    status: Optional[str] = None,
    limit: int = 100,
    quotes: QuoteRepository = Depends(get_quote_repository),
):
    return quotes.list(status=status, limit=min(limit, 500))


@router.get("/admin/quotes/{quote_id}", response_model=QuoteRequest)
def get_quote(quote_id: int, svc: EstimateService = Depends(get_estimate_service)):
    return quote_from_orm(svc.get_quote(quote_id))


@router.get("/admin/quotes/{quote_id}/line-items/preview", response_model=List[LineItem])
def preview_line_items(quote_id: int, svc: EstimateService = Depends(get_estimate_service)):
    return svc.preview_line_items(quote_id)


@router.post("/admin/quotes/{quote_id}/status", response_model=QuoteRequest)
def set_quote_status(
    quote_id: int,
    body: StatusUpdate,
    svc: EstimateService = Depends(get_estimate_service),
):
    return quote_from_orm(svc.set_quote_status(quote_id, body.status, body.role, body.reason))
