"""
Variant selection for the product detail page.

A product has a flat list of variants (ram, storage, color, price, stock).
Storage choices narrow to the chosen RAM and colors to the chosen
(RAM, storage) pair. With nothing chosen, the first in-stock variant wins.
"""
from typing import Any, Dict, Iterable, List, Optional

Variant = Dict[str, Any]


def in_stock(variant: Variant) -> bool:
    return variant.get("stock", 0) > 0 and variant.get("isAvailable", True)


def _unique(values: Iterable[str]) -> List[str]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _pick(candidates: List[Variant], key: str) -> Optional[str]:
    for variant in candidates:
        if in_stock(variant):
            return variant[key]
    return candidates[0][key] if candidates else None


def ram_options(variants: List[Variant]) -> List[str]:
    return _unique(v["ram"] for v in variants)


def storage_options(variants: List[Variant], ram: Optional[str]) -> List[str]:
    return _unique(v["storage"] for v in variants if v["ram"] == ram)


def color_options(variants: List[Variant], ram: Optional[str], storage: Optional[str]) -> List[str]:
    return _unique(v["color"] for v in variants if v["ram"] == ram and v["storage"] == storage)


def default_variant(variants: List[Variant]) -> Optional[Variant]:
    for variant in variants:
        if in_stock(variant):
            return variant
    return variants[0] if variants else None


def find_variant(variants: List[Variant], ram, storage, color) -> Optional[Variant]:
    for variant in variants:
        if (variant["ram"], variant["storage"], variant["color"]) == (ram, storage, color):
            return variant
    return None


def resolve_selection(
    variants: List[Variant],
    ram: Optional[str] = None,
    storage: Optional[str] = None,
    color: Optional[str] = None,
) -> Dict[str, Any]:
    """Narrow the option lists to the current choice and return the matching variant.

    A choice that is not offered under the levels above it is replaced by the
    first in-stock option at that level (or the first option when none is in
    stock), so the result always names a real variant when the list is not empty.
    """
    if not variants:
        return {"ram": [], "storage": [], "color": [], "selected": None}

    rams = ram_options(variants)
    if ram not in rams:
        ram = default_variant(variants)["ram"]

    storages = storage_options(variants, ram)
    if storage not in storages:
        storage = _pick([v for v in variants if v["ram"] == ram], "storage")

    colors = color_options(variants, ram, storage)
    if color not in colors:
        color = _pick([v for v in variants if v["ram"] == ram and v["storage"] == storage], "color")

    return {
        "ram": rams,
        "storage": storages,
        "color": colors,
        "selected": find_variant(variants, ram, storage, color),
    }
