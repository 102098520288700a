# catering/estimates/menu_labels.py
from __future__ import annotations

import re
from typing import Iterable, Optional


MENU_LABELS: dict[str, str] = {
    # proteins
    "bbq-chicken": "BBQ Chicken",
    "baked-smoked-chicken": "Baked/Smoked Chicken",
    "chicken-tenders": "Chicken Tenders",
    "fried-chicken": "Fried Chicken",
    "pulled-pork": "Pulled Pork",
    "bbq-pulled-pork": "BBQ Pulled Pork",
    "ribs": "Ribs",
    "bbq-ribs": "BBQ Ribs",
    "brisket": "Brisket",
    "baked-salmon": "Baked Salmon",
    "fried-fish": "Fried Fish",
    "applewood-smoked-chicken": "Applewood-Smoked Herb Chicken",
    "buttermilk-fried-chicken": "Buttermilk Fried Chicken",
    "hickory-smoked-brisket": "Hickory-Smoked Beef Brisket",
    "honey-bourbon-ham": "Glazed Honey-Bourbon Ham",
    "honey-glazed-ribs": "Honey-Glazed Ribs",
    "lemon-honey-salmon": "Lemon-Honey Seared Salmon",
    "lowcountry-boil": "Signature Lowcountry Boil",
    # appetizers
    "grazing-boards": "Grazing Boards",
    "charcuterie-board": "Charcuterie Board",
    "cheese-board": "Cheese Board",
    "fruit-display": "Fresh Fruit Display",
    "veggie-tray": "Veggie Tray",
    "deviled-eggs": "Deviled Eggs",
    "vegan-spring-rolls": "Vegan Spring Rolls",
    "fried-chicken-wings": "Fried Chicken Wings",
    # sides
    "mac-and-cheese": "Mac & Cheese",
    "truffle-mac-cheese": "Truffle Mac & Cheese",
    "baked-beans": "Baked Beans",
    "coleslaw": "Coleslaw",
    "potato-salad": "Potato Salad",
    "green-beans": "Green Beans",
    "cornbread": "Cornbread",
    "collard-greens": "Collard Greens",
    "mashed-potatoes": "Mashed Potatoes",
    "rice-pilaf": "Rice Pilaf",
    "garden-salad": "Garden Salad",
    # desserts
    "red-velvet-cake": "Red Velvet Cake",
    "peach-cobbler": "Peach Cobbler",
    "banana-pudding": "Banana Pudding",
    "chocolate-cake": "Chocolate Cake",
    "sweet-potato-pie": "Sweet Potato Pie",
    # drinks
    "sweet-tea": "Sweet Tea",
    "unsweet-tea": "Unsweetened Tea",
    "lemonade": "Lemonade",
    "water": "Bottled Water",
}

EVENT_TYPE_LABELS: dict[str, str] = {
    "corporate": "Corporate",
    "private-party": "Private Party",
    "birthday": "Birthday",
    "anniversary": "Anniversary",
    "graduation": "Graduation",
    "holiday-party": "Holiday Party",
    "wedding": "Wedding",
    "black-tie": "Black Tie",
    "military-function": "Military Function",
    "government": "Government",
}

# generic choices from the intake form that add nothing to a title
UNLABELLED_EVENT_TYPES = {"other", "none"}

SERVICE_TYPE_LABELS: dict[str, str] = {
    "full-service": "Full Service Catering",
    "delivery-setup": "Delivery with Setup",
    "delivery-only": "Delivery Only",
    "drop-off": "Drop Off Delivery",
    # legacy spellings
    "full_service": "Full Service Catering",
    "drop_off": "Drop Off Delivery",
    "drop_off_with_setup": "Delivery with Setup",
}

_TOKEN_SPLIT = re.compile(r"[-_]+")


def _title_tokens(value: str) -> str:
    tokens = [t for t in _TOKEN_SPLIT.split(value.strip()) if t]
    return " ".join(t[:1].upper() + t[1:] for t in tokens)


def format_menu_item(item_id: str) -> str:
    """bbq-chicken -> "BBQ Chicken" (dictionary), smoked-duck-confit -> "Smoked Duck Confit"."""
    if not item_id:
        return ""
    key = item_id.strip()
    label = MENU_LABELS.get(key) or MENU_LABELS.get(key.lower())
    if label:
        return label
    return _title_tokens(key)


def format_menu_items(item_ids: Iterable[str]) -> list[str]:
    return [label for label in (format_menu_item(i) for i in item_ids) if label]


def format_event_type(event_type: Optional[str]) -> str:
    if not event_type or event_type.strip().lower() in UNLABELLED_EVENT_TYPES:
        return ""
    return EVENT_TYPE_LABELS.get(event_type.lower(), _title_tokens(event_type))


def service_type_label(service_type: Optional[str]) -> Optional[str]:
    # Unknown service types have no label on purpose; the caller skips the tier.
    if not service_type:
        return None
    return SERVICE_TYPE_LABELS.get(service_type.strip().lower())
