# FILE: app/services/units.py
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from app.schemas.sales_order import UnitDefinition, UnitSelector

TABLET = "tablet"
STRIP = "strip"
GENERIC_UNIT_LABEL = "PCS"


def normalize_unit(label: Optional[str]) -> str:
    return (label or "").lower()


def is_pack_priced(label: Optional[str]) -> bool:
    """Tablet and strip lines are priced per strip (MRP is per pack)."""
    return normalize_unit(label) in (TABLET, STRIP)


def find_unit(unit_id: Optional[int],
              unit_table: Iterable[UnitDefinition]) -> Optional[UnitDefinition]:
    if not unit_id:
        return None
    for unit in unit_table:
        if unit.unit_id == unit_id:
            return unit
    return None


def resolve_unit_label(
    unit_id: Optional[int],
    selector: UnitSelector,
    unit_table: Iterable[UnitDefinition],
) -> Optional[str]:
    """
    Base or secondary label of a unit.
    Unset / unknown unit ids resolve to None; callers price those as PCS.
    """
    unit = find_unit(unit_id, unit_table)
    if unit is None:
        return None
    if selector == "secondary":
        return unit.secondary_unit or None
    return unit.base_unit or None


def match_unit_label(
    label: Optional[str],
    unit_table: Iterable[UnitDefinition],
) -> Tuple[Optional[UnitDefinition], UnitSelector]:
    """
    Reverse lookup used when rebuilding a draft from a stored order:
    first unit whose base or secondary label equals `label` (case-insensitive).
    """
    wanted = normalize_unit(label)
    if not wanted:
        return None, "base"
    for unit in unit_table:
        if normalize_unit(unit.base_unit) == wanted or normalize_unit(
                unit.secondary_unit) == wanted:
            selector: UnitSelector = ("secondary" if normalize_unit(
                unit.secondary_unit) == wanted else "base")
            return unit, selector
    return None, "base"
