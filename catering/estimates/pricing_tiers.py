# catering/estimates/pricing_tiers.py
from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import validate

from catering.core.settings import settings

SCHEMA_PATH = Path(__file__).parent / "pricing_tiers.schema.json"


@dataclass(frozen=True)
class PricingTier:
    id: str
    label: str
    per_guest_rate: int  # cents
    description: Optional[str] = None


def parse_pricing_tiers(raw: Dict[str, Any]) -> List[PricingTier]:
    """Validate a tiers document against the schema and build PricingTier rows."""
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)

    validate(instance=raw, schema=schema)

    tiers = [
        PricingTier(
            id=t["id"],
            label=t["label"],
            per_guest_rate=int(t["per_guest_rate"]),
            description=t.get("description"),
        )
        for t in raw["tiers"]
    ]
    ids = [t.id for t in tiers]
    if len(ids) != len(set(ids)):
        raise ValueError(f"duplicate pricing tier ids in {ids}")
    return tiers


@lru_cache(maxsize=4)
def load_pricing_tiers(path: Optional[str] = None) -> tuple[PricingTier, ...]:
    tiers_path = Path(path or settings.PRICING_TIERS_PATH)
    if not tiers_path.exists():
        raise FileNotFoundError(f"Pricing tiers not found: {tiers_path}")

    with tiers_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return tuple(parse_pricing_tiers(raw))


def get_tier(tier_id: str, path: Optional[str] = None) -> PricingTier:
    for tier in load_pricing_tiers(path):
        if tier.id == tier_id:
            return tier
    raise KeyError(f"Unknown pricing tier: {tier_id}")
