# catering/services/intake.py
from __future__ import annotations

from catering.core.logging_config import logger
from catering.core.settings import settings
from catering.errors import FunctionInvocationError
from catering.estimates.line_items import preview_labels
from catering.models.quote_request import QuoteRequestORM
from catering.observability.metrics import quotes_received_total
from catering.repositories.quotes import QuoteRepository, quote_from_orm
from catering.schemas.quote_request import QuoteRequestCreate
from catering.services.email_render import render_quote_received_email
from catering.services.functions_client import SEND_QUOTE_CONFIRMATION, FunctionsClient


def submit_quote(
    data: QuoteRequestCreate,
    quotes: QuoteRepository,
    functions: FunctionsClient,
) -> QuoteRequestORM:
    """
    Store a public quote request and ask the backend to send a confirmation.

    The confirmation is best effort: the quote is already stored, so a
    failing email function is logged and the request still succeeds.
    """
    values = data.model_dump()
    values["service_type"] = data.service_type.value
    values["status"] = "pending"
    quote = quotes.create(values)

    quotes_received_total.labels(service_type=quote.service_type).inc()
    logger.info(
        "quote_received",
        quote_id=quote.id,
        event_type=quote.event_type,
        guest_count=quote.guest_count,
        service_type=quote.service_type,
    )

    html = render_quote_received_email(
        customer_name=quote.contact_name,
        event_name=quote.event_name,
        guest_count=quote.guest_count,
        menu=preview_labels(quote_from_orm(quote)),
        company_name=settings.COMPANY_NAME,
    )
    try:
        functions.invoke(
            SEND_QUOTE_CONFIRMATION,
            {
                "quoteId": quote.id,
                "to": quote.email,
                "adminEmail": settings.ADMIN_EMAIL,
                "html": html,
            },
        )
    except FunctionInvocationError as e:
        logger.warning("quote_confirmation_failed", quote_id=quote.id, error=str(e))

    return quote
