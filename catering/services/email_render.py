# catering/services/email_render.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from catering.schemas.invoice import LineItem

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def money(cents: int) -> str:
    return f"${cents / 100:,.2f}"


_env.filters["money"] = money


def render_estimate_email(
    *,
    customer_name: str,
    event_name: str,
    event_date: Optional[str],
    invoice_number: Optional[str],
    line_items: Sequence[LineItem],
    subtotal: int,
    tax_amount: int,
    total: int,
    company_name: str,
    public_url: str,
    message: Optional[str] = None,
) -> str:
    tmpl = _env.get_template("email/estimate_ready.html")
    return tmpl.render(
        customer_name=customer_name,
        event_name=event_name,
        event_date=event_date,
        invoice_number=invoice_number,
        line_items=line_items,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=total,
        company_name=company_name,
        public_url=public_url,
        message=message,
    )


def render_quote_received_email(
    *,
    customer_name: str,
    event_name: str,
    guest_count: int,
    menu: Sequence[str],
    company_name: str,
) -> str:
    tmpl = _env.get_template("email/quote_received.html")
    return tmpl.render(
        customer_name=customer_name,
        event_name=event_name,
        guest_count=guest_count,
        menu=menu,
        company_name=company_name,
    )
