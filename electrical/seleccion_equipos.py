# electrical/seleccion_equipos.py
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from core.configuracion import ParametrosCotizacion
from core.contrato import Equipos, OpcionInversor, OpcionPanel
from core.errores import NoSuitableEquipmentError, ValidationError
from core.rutas import redondear
from electrical.catalogos import Inversor, Panel

logger = logging.getLogger(__name__)


# ==========================================================
# Conteos
# ==========================================================

def n_paneles(tamano_kw: float, potencia_w: float) -> int:
    if potencia_w <= 0:
        raise ValueError("Panel inválido (W<=0).")
    return max(1, int(math.ceil(float(tamano_kw) * 1000.0 / float(potencia_w))))


def n_inversores(tamano_kw: float, potencia_kw: float) -> int:
    if potencia_kw <= 0:
        raise ValueError("Inversor inválido (kW<=0).")
    return max(1, int(math.ceil(float(tamano_kw) / float(potencia_kw))))


# ==========================================================
# Opciones
# ==========================================================

def opciones_paneles(tamano_kw: float, paneles: Sequence[Panel], params: ParametrosCotizacion) -> List[OpcionPanel]:
    out: List[OpcionPanel] = []
    for p in paneles:
        n = n_paneles(tamano_kw, p.potencia_w)
        out.append(
            OpcionPanel(
                id=p.id,
                marca=p.marca,
                potencia_w=p.potencia_w,
                precio_unitario=p.precio,
                cantidad=n,
                area_techo_m2=redondear(n * float(params.area_por_panel_m2), 2),
                costo_total=n * p.precio,
                default_choice=bool(p.default_choice),
            )
        )
    return out


def opciones_inversores(
    tamano_kw: float,
    inversores: Sequence[Inversor],
    params: ParametrosCotizacion,
) -> List[OpcionInversor]:
    out: List[OpcionInversor] = []
    for inv in inversores:
        # solo unidades que por sí solas cubren el tamaño
        if inv.potencia_kw < tamano_kw:
            continue
        n = n_inversores(tamano_kw, inv.potencia_kw)
        out.append(
            OpcionInversor(
                id=inv.id,
                marca=inv.marca,
                potencia_kw=inv.potencia_kw,
                precio_unitario=inv.precio,
                cantidad=n,
                costo_total=n * inv.precio,
                eficiencia=params.eficiencia_inversor,
            )
        )
    return out


# ==========================================================
# Selección
# ==========================================================

def _mas_barato(opciones):
    # min() devuelve el primero en empate => orden de catálogo
    return min(opciones, key=lambda o: o.costo_total)


def _por_id(opciones, equipo_id: str, campo: str):
    for o in opciones:
        if o.id == equipo_id:
            return o
    validos = ", ".join(o.id for o in opciones)
    raise ValidationError(f"Invalid {campo} '{equipo_id}'. Must be one of: {validos}", campo=campo)


def elegir_panel(opciones: List[OpcionPanel], panel_id: Optional[str] = None) -> OpcionPanel:
    if not opciones:
        raise ValueError("Sin opciones de panel.")
    if panel_id:
        return _por_id(opciones, panel_id, "panelId")
    for o in opciones:
        if o.default_choice:
            return o
    return _mas_barato(opciones)


def elegir_inversor(
    opciones: List[OpcionInversor],
    tamano_kw: float,
    inversor_id: Optional[str] = None,
) -> OpcionInversor:
    if not opciones:
        raise NoSuitableEquipmentError(tamano_kw)
    if inversor_id:
        return _por_id(opciones, inversor_id, "inverterId")
    return _mas_barato(opciones)


def seleccionar_equipos(
    *,
    tamano_kw: float,
    paneles: Sequence[Panel],
    inversores: Sequence[Inversor],
    params: ParametrosCotizacion,
    panel_id: Optional[str] = None,
    inversor_id: Optional[str] = None,
) -> Equipos:
    op_inv = opciones_inversores(tamano_kw, inversores, params)
    inv_sel = elegir_inversor(op_inv, tamano_kw, inversor_id)

    op_pan = opciones_paneles(tamano_kw, paneles, params)
    pan_sel = elegir_panel(op_pan, panel_id)

    logger.debug(
        "Equipos para %s kW: panel=%s x%s, inversor=%s x%s",
        tamano_kw, pan_sel.id, pan_sel.cantidad, inv_sel.id, inv_sel.cantidad,
    )

    return Equipos(
        paneles=op_pan,
        inversores=op_inv,
        panel_seleccionado=pan_sel,
        inversor_seleccionado=inv_sel,
    )
