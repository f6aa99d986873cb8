# electrical/energia/produccion.py
from __future__ import annotations

from typing import List

from core.configuracion import ParametrosCotizacion
from core.contrato import Produccion


def perfil_mensual(mensual_kwh: float, variacion_12m: List[float]) -> List[float]:
    """Curva Ene..Dic: producción mensual promedio × factor estacional."""
    if len(variacion_12m) != 12:
        raise ValueError("variacion_mensual debe tener 12 valores (Ene..Dic)")
    return [float(mensual_kwh) * float(f) for f in variacion_12m]


def estimar_produccion(
    *,
    tamano_kw: float,
    produccion_diaria_por_kw: float,
    produccion_mensual_por_kw: float,
    irradiancia: float,
    params: ParametrosCotizacion,
) -> Produccion:
    diaria = float(tamano_kw) * float(produccion_diaria_por_kw)
    mensual = float(tamano_kw) * float(produccion_mensual_por_kw)

    return Produccion(
        diaria_kwh=diaria,
        mensual_kwh=mensual,
        anual_kwh=diaria * int(params.dias_anio),
        por_mes_kwh=perfil_mensual(mensual, params.variacion_mensual),
        horas_sol_pico=float(irradiancia),
    )
