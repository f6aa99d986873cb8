# core/validacion.py
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from .configuracion import ParametrosCotizacion
from .errores import ValidationError
from .modelo import (
    ORIENTACION_DEFAULT,
    SOMBREADO_DEFAULT,
    TIPO_TECHO_DEFAULT,
    UBICACION_DEFAULT,
    Orientacion,
    SizingInput,
    Sombreado,
    TipoTecho,
    Ubicacion,
)

E = TypeVar("E", bound=Enum)


def _ausente(v: Any) -> bool:
    return v is None or (isinstance(v, str) and v.strip() == "")


def _numero(v: Any) -> Optional[float]:
    if isinstance(v, bool):
        return None
    try:
        x = float(v)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def _enum(payload: Mapping[str, Any], campo: str, tipo: Type[E], default: E, etiqueta: str) -> E:
    v = payload.get(campo)
    if _ausente(v):
        return default
    if isinstance(v, tipo):
        return v
    try:
        return tipo(str(v).strip())
    except ValueError:
        validos = ", ".join(e.value for e in tipo)
        raise ValidationError(f"Invalid {etiqueta}. Must be one of: {validos}", campo=campo) from None


def _id_opcional(payload: Mapping[str, Any], campo: str) -> Optional[str]:
    v = payload.get(campo)
    if _ausente(v):
        return None
    return str(v).strip()


def validar_entrada(
    payload: Mapping[str, Any],
    params: Optional[ParametrosCotizacion] = None,
) -> SizingInput:
    """
    payload (JSON sin tipos) -> SizingInput.
    Campos ausentes toman su default; valores desconocidos son error.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    params = params or ParametrosCotizacion()

    uso = _numero(payload.get("monthlyUsage"))
    if uso is None or uso <= 0:
        raise ValidationError("Valid monthly usage in kWh is required", campo="monthlyUsage")

    forzado: Optional[float] = None
    if not _ausente(payload.get("forceSize")):
        forzado = _numero(payload.get("forceSize"))
        lo, hi = params.tamano_forzado_min_kw, params.tamano_forzado_max_kw
        if forzado is None or forzado < lo or forzado > hi:
            raise ValidationError(f"Force size must be between {lo:g} and {hi:g} kW", campo="forceSize")

    return SizingInput(
        monthly_usage_kwh=uso,
        location=_enum(payload, "location", Ubicacion, UBICACION_DEFAULT, "location"),
        roof_direction=_enum(payload, "roofDirection", Orientacion, ORIENTACION_DEFAULT, "roof direction"),
        roof_type=_enum(payload, "roofType", TipoTecho, TIPO_TECHO_DEFAULT, "roof type"),
        shading=_enum(payload, "shading", Sombreado, SOMBREADO_DEFAULT, "shading"),
        forced_size_kw=forzado,
        panel_id=_id_opcional(payload, "panelId"),
        inverter_id=_id_opcional(payload, "inverterId"),
    )


def validar_sizing_input(inp: SizingInput, params: Optional[ParametrosCotizacion] = None) -> None:
    """Mismas reglas para callers que construyen SizingInput directamente."""
    params = params or ParametrosCotizacion()

    uso = _numero(inp.monthly_usage_kwh)
    if uso is None or uso <= 0:
        raise ValidationError("Valid monthly usage in kWh is required", campo="monthlyUsage")

    if inp.forced_size_kw is not None:
        f = _numero(inp.forced_size_kw)
        lo, hi = params.tamano_forzado_min_kw, params.tamano_forzado_max_kw
        if f is None or f < lo or f > hi:
            raise ValidationError(f"Force size must be between {lo:g} and {hi:g} kW", campo="forceSize")

    for campo, valor, tipo in (
        ("location", inp.location, Ubicacion),
        ("roofDirection", inp.roof_direction, Orientacion),
        ("roofType", inp.roof_type, TipoTecho),
        ("shading", inp.shading, Sombreado),
    ):
        if not isinstance(valor, tipo):
            validos = ", ".join(e.value for e in tipo)
            raise ValidationError(f"Invalid {campo}. Must be one of: {validos}", campo=campo)
