from __future__ import annotations

from typing import Any, Dict, List

__all__ = [
    "as_float",
    "as_int",
    "get_system_size",
    "get_costs",
    "get_total_cost",
    "get_selected_panel",
    "get_selected_inverter",
    "get_panel_count",
    "get_production_by_month",
    "get_annual_production",
]


# ==========================================================
# Helpers base
#   Lectura tolerante del dict serializado (ej. copia persistida
#   en una cotización). Nunca lanza, nunca muta.
# ==========================================================
def _as_dict(x: Any) -> Dict[str, Any]:
    if isinstance(x, dict):
        return dict(x)
    if hasattr(x, "a_dict"):
        return dict(x.a_dict())
    return {}


def as_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return float(default)
        return float(x)
    except (TypeError, ValueError):
        return float(default)


def as_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return int(default)
        return int(float(x))
    except (TypeError, ValueError):
        return int(default)


def _equipment(res: Any) -> Dict[str, Any]:
    return _as_dict(_as_dict(res).get("equipment"))


# ==========================================================
# Accessors
# ==========================================================
def get_system_size(res: Any) -> float:
    return as_float(_as_dict(res).get("systemSize"))


def get_costs(res: Any) -> Dict[str, Any]:
    return _as_dict(_as_dict(res).get("costs"))


def get_total_cost(res: Any) -> float:
    return as_float(get_costs(res).get("total"))


def get_selected_panel(res: Any) -> Dict[str, Any]:
    return _as_dict(_equipment(res).get("selectedPanel"))


def get_selected_inverter(res: Any) -> Dict[str, Any]:
    return _as_dict(_equipment(res).get("selectedInverter"))


def get_panel_count(res: Any) -> int:
    return as_int(get_selected_panel(res).get("count"))


def get_production_by_month(res: Any) -> List[float]:
    prod = _as_dict(_as_dict(res).get("production"))
    vals = prod.get("byMonth")
    if not isinstance(vals, list):
        return []
    return [as_float(v) for v in vals]


def get_annual_production(res: Any) -> float:
    return as_float(_as_dict(_as_dict(res).get("production")).get("annual"))
