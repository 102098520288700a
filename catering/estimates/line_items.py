# catering/estimates/line_items.py
from __future__ import annotations

import math
import re
from typing import List, Optional, Tuple

from catering.estimates.menu_labels import (
    SERVICE_TYPE_LABELS,
    format_event_type,
    format_menu_item,
    format_menu_items,
    service_type_label,
)
from catering.schemas.invoice import LineItem
from catering.schemas.quote_request import QuoteRequest

DIETARY_MARKERS = ("vegan", "vegetarian", "veggie")

# Placeholder until quotes carry an explicit dietary guest count.
DIETARY_GUEST_SHARE = 0.1

VEGETARIAN_ENTREE_FALLBACK = "Vegetarian entrée options for guests with dietary restrictions"

# (flag on the quote, title, description)
SERVICE_ADDONS: Tuple[Tuple[str, str, str], ...] = (
    (
        "wait_staff_requested",
        "Wait Staff Service",
        "Professional wait staff to serve guests throughout the event",
    ),
    (
        "bussing_tables_needed",
        "Table Bussing Service",
        "Professional table clearing and maintenance during event",
    ),
    (
        "ceremony_included",
        "Ceremony Service",
        "Food service during ceremony",
    ),
    (
        "cocktail_hour",
        "Cocktail Hour Service",
        "Pre-reception cocktail hour catering",
    ),
)

# chafers are handled separately, their label depends on the service type
SUPPLY_LABELS: Tuple[Tuple[str, str], ...] = (
    ("serving_utensils_requested", "Serving Utensils"),
    ("plates_requested", "Plates"),
    ("cups_requested", "Cups"),
    ("napkins_requested", "Napkins"),
    ("ice_requested", "Ice"),
)

_FIRST_INT = re.compile(r"\d+")


def is_dietary_item(item_id: str) -> bool:
    lowered = item_id.lower()
    return any(marker in lowered for marker in DIETARY_MARKERS)


def dietary_guest_estimate(guest_count: int) -> int:
    return max(1, math.floor(guest_count * DIETARY_GUEST_SHARE))


def parse_restriction_count(descriptor: Optional[str]) -> int:
    """First integer in a free-text descriptor ("about 6 vegans" -> 6), else 1."""
    if not descriptor:
        return 1
    m = _FIRST_INT.search(descriptor)
    if not m:
        return 1
    return int(m.group(0))


def _item(
    item_id: str,
    title: str,
    description: str,
    quantity: int,
    category: str,
    metadata: Optional[dict] = None,
) -> LineItem:
    return LineItem(
        id=item_id,
        title=title,
        description=description,
        quantity=quantity,
        unit_price=0,
        total_price=0,
        category=category,
        metadata=metadata,
    )


def _package_description(quote: QuoteRequest) -> str:
    description = " & ".join(format_menu_items(quote.proteins))
    sides = format_menu_items(quote.sides[:2])
    if sides:
        description += " with " + " and ".join(sides)
    description += ", dinner rolls"
    drinks = format_menu_items(quote.drinks)
    if drinks:
        description += " and " + " and ".join(drinks)
    return description


def _package_title(quote: QuoteRequest) -> str:
    label = format_event_type(quote.event_type)
    return f"{label} Catering Package" if label else "Catering Package"


def _supplies(quote: QuoteRequest) -> List[str]:
    supplies: List[str] = []
    if quote.chafers_requested:
        if service_type_label(quote.service_type) == SERVICE_TYPE_LABELS["full-service"]:
            supplies.append("Chafing Dishes with Fuel")
        else:
            supplies.append("Food Warmers with Fuel")
    for field, label in SUPPLY_LABELS:
        if getattr(quote, field):
            supplies.append(label)
    return supplies


def generate_line_items(quote: QuoteRequest) -> List[LineItem]:
    """
    Decompose a quote request into billing tiers, in display order.

    Every item comes out unpriced (unit_price = total_price = 0); prices are
    set afterwards by an admin or by apply_flat_rate().
    """
    guests = quote.guest_count
    items: List[LineItem] = []

    # 1) catering package: proteins + first two sides + rolls + drinks
    if quote.proteins:
        items.append(
            _item("package", _package_title(quote), _package_description(quote), guests, "package")
        )

    # 2) appetizers, dietary ones split out
    regular_apps = [a for a in quote.appetizers if not is_dietary_item(a)]
    dietary_apps = [a for a in quote.appetizers if is_dietary_item(a)]
    if regular_apps:
        items.append(
            _item(
                "appetizers",
                "Appetizer Selection",
                ", ".join(format_menu_items(regular_apps)),
                guests,
                "appetizers",
            )
        )
    if dietary_apps:
        items.append(
            _item(
                "appetizers-dietary",
                "Dietary Appetizer Selection",
                ", ".join(format_menu_items(dietary_apps)),
                dietary_guest_estimate(guests),
                "dietary",
            )
        )

    # 3) sides beyond the two in the package
    extra_sides = quote.sides[2:]
    if extra_sides:
        items.append(
            _item(
                "sides-additional",
                "Additional Side Selection",
                ", ".join(format_menu_items(extra_sides)),
                guests,
                "sides",
            )
        )

    # 4) desserts
    if quote.desserts:
        items.append(
            _item(
                "desserts",
                "Dessert Selection",
                ", ".join(format_menu_items(quote.desserts)),
                guests,
                "desserts",
            )
        )

    # 5) vegetarian entrees
    if quote.guest_count_with_restrictions or quote.vegetarian_entrees:
        entrees = format_menu_items(quote.vegetarian_entrees)
        items.append(
            _item(
                "dietary-entrees",
                "Vegetarian Entrée Selection",
                ", ".join(entrees) if entrees else VEGETARIAN_ENTREE_FALLBACK,
                parse_restriction_count(quote.guest_count_with_restrictions),
                "dietary",
            )
        )

    # 6) service package
    service_label = service_type_label(quote.service_type)
    if service_label:
        items.append(_item("service", "Service Package", service_label, 1, "service"))

    # 7) service add-ons
    for field, title, description in SERVICE_ADDONS:
        if getattr(quote, field):
            items.append(
                _item(
                    f"addon-{field}",
                    title,
                    description,
                    1,
                    "service_addon",
                    metadata={"source": "customer_request", "field": field},
                )
            )

    # 8) supplies & equipment, one consolidated line
    supplies = _supplies(quote)
    if supplies:
        items.append(
            _item("supplies", "Supply & Equipment Package", ", ".join(supplies), 1, "supplies")
        )

    return items


def preview_labels(quote: QuoteRequest) -> List[str]:
    """Human readable menu for notifications: every selected item, formatted."""
    selected = [*quote.proteins, *quote.sides, *quote.appetizers, *quote.desserts, *quote.drinks]
    return [format_menu_item(i) for i in selected]
