# electrical/sizing_sistema.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from core.configuracion import ParametrosCotizacion
from core.contrato import RangoRecomendado
from core.errores import ValidationError


@dataclass(frozen=True)
class ResultadoTamano:
    tamano_sistema_kw: float          # tamaño final (con margen, o forzado tal cual)
    tamano_crudo_kw: float            # consumo / producción por kW, sin redondeo
    rango: RangoRecomendado
    produccion_diaria_por_kw: float   # kWh/kW-día
    produccion_mensual_por_kw: float  # kWh/kW-mes


# ==========================================================
# Redondeo a medio kW
# ==========================================================

def redondear_arriba_medio_kw(x: float) -> float:
    return math.ceil(float(x) * 2.0) / 2.0


def redondear_abajo_medio_kw(x: float) -> float:
    return math.floor(float(x) * 2.0) / 2.0


# ==========================================================
# API pública
# ==========================================================

def resolver_tamano(
    *,
    consumo_mensual_kwh: float,
    eficiencia_sistema: float,
    irradiancia: float,
    params: ParametrosCotizacion,
    tamano_forzado_kw: Optional[float] = None,
) -> ResultadoTamano:
    """
    Siempre redondea hacia arriba: nunca queda por debajo del consumo.

    1) prod_dia_kw = HSP * eficiencia; prod_mes_kw = prod_dia_kw * 30.5
    2) recomendado = ceil_0.5(consumo / prod_mes_kw)
    3) final = ceil_0.5(recomendado * 1.05)   (solo sin forzar)
    4) forzado => final = forzado, sin margen ni redondeo
    5) rango min/max desde el recomendado sin forzar
    """
    prod_dia_kw = float(irradiancia) * float(eficiencia_sistema)
    prod_mes_kw = prod_dia_kw * float(params.dias_mes)
    if prod_mes_kw <= 0:
        raise ValueError("Producción mensual por kW inválida (<=0).")

    crudo = float(consumo_mensual_kwh) / prod_mes_kw
    # el tamaño se expresa luego en W (paneles) y kWh/año, con margen y rango: debe seguir siendo finito
    if not math.isfinite(crudo * 2.0 * 1000.0 * float(params.dias_anio)):
        raise ValidationError("Monthly usage is too large to size a system", campo="monthlyUsage")

    recomendado = redondear_arriba_medio_kw(crudo)
    con_margen = redondear_arriba_medio_kw(recomendado * float(params.factor_confiabilidad_red))

    if tamano_forzado_kw is not None:
        final = float(tamano_forzado_kw)
    else:
        final = con_margen

    rango = RangoRecomendado(
        minimo=max(1.0, redondear_abajo_medio_kw(recomendado * params.rango_min_factor)),
        recomendado=con_margen,
        maximo=redondear_arriba_medio_kw(recomendado * params.rango_max_factor),
    )

    return ResultadoTamano(
        tamano_sistema_kw=final,
        tamano_crudo_kw=crudo,
        rango=rango,
        produccion_diaria_por_kw=prod_dia_kw,
        produccion_mensual_por_kw=prod_mes_kw,
    )
