# core/sizing.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .configuracion import ParametrosCotizacion
from .contrato import Metadatos, SizingResult
from .modelo import SizingInput
from .validacion import validar_sizing_input

from electrical.catalogos import CatalogoYAML, FuenteCatalogo, leer_catalogo
from electrical.energia.eficiencia import componer_eficiencia
from electrical.energia.produccion import estimar_produccion
from electrical.estimador import (
    dividir_consumo,
    estimar_costos,
    recomendar_bateria,
    resumen_clima,
    resumen_techo,
)
from electrical.seleccion_equipos import seleccionar_equipos
from electrical.sizing_sistema import resolver_tamano

logger = logging.getLogger(__name__)


def _metadatos(inp: SizingInput, params: ParametrosCotizacion, ahora: Optional[datetime]) -> Metadatos:
    ts = (ahora or datetime.now(timezone.utc)).isoformat()
    return Metadatos(
        version=params.version_calculo,
        fecha_calculo=ts,
        ubicacion=inp.location.value,
        orientacion=inp.roof_direction.value,
        tipo_techo=inp.roof_type.value,
        sombreado=inp.shading.value,
        tamano_forzado_kw=inp.forced_size_kw,
    )


# ==========================================================
# API pública: sizing + cotización
# ==========================================================

def calcular_sizing_unificado(
    inp: SizingInput,
    *,
    fuente: Optional[FuenteCatalogo] = None,
    params: Optional[ParametrosCotizacion] = None,
    intentos_catalogo: int = 1,
    ahora: Optional[datetime] = None,
) -> SizingResult:
    """
    Flujo lineal:
    eficiencia → tamaño → catálogo → equipos → costos/producción → resultado.
    Sin resultados parciales: o devuelve todo o lanza.
    """
    params = params or ParametrosCotizacion()
    validar_sizing_input(inp, params)
    fuente = fuente if fuente is not None else CatalogoYAML()

    # =========================
    # Eficiencia + tamaño
    # =========================
    factores = componer_eficiencia(
        ubicacion=inp.location,
        orientacion=inp.roof_direction,
        tipo_techo=inp.roof_type,
        sombreado=inp.shading,
        params=params,
    )

    tam = resolver_tamano(
        consumo_mensual_kwh=inp.monthly_usage_kwh,
        eficiencia_sistema=factores.eficiencia_sistema,
        irradiancia=factores.irradiancia,
        params=params,
        tamano_forzado_kw=inp.forced_size_kw,
    )
    tamano_kw = tam.tamano_sistema_kw

    logger.debug(
        "Sizing: consumo=%s kWh, eficiencia=%.4f, crudo=%.3f kW, final=%s kW (forzado=%s)",
        inp.monthly_usage_kwh, factores.eficiencia_sistema, tam.tamano_crudo_kw, tamano_kw, inp.forzado,
    )

    # =========================
    # Equipos
    # =========================
    catalogo = leer_catalogo(fuente, tamano_kw, intentos=intentos_catalogo)
    equipos = seleccionar_equipos(
        tamano_kw=tamano_kw,
        paneles=catalogo.paneles,
        inversores=catalogo.inversores,
        params=params,
        panel_id=inp.panel_id,
        inversor_id=inp.inverter_id,
    )

    # =========================
    # Costos + producción
    # =========================
    costos = estimar_costos(
        panel=equipos.panel_seleccionado,
        inversor=equipos.inversor_seleccionado,
        params=params,
    )
    produccion = estimar_produccion(
        tamano_kw=tamano_kw,
        produccion_diaria_por_kw=tam.produccion_diaria_por_kw,
        produccion_mensual_por_kw=tam.produccion_mensual_por_kw,
        irradiancia=factores.irradiancia,
        params=params,
    )

    return SizingResult(
        tamano_sistema_kw=tamano_kw,
        rango=tam.rango,
        eficiencia=factores,
        equipos=equipos,
        costos=costos,
        techo=resumen_techo(equipos.panel_seleccionado, factores, inp.roof_direction.value),
        bateria=recomendar_bateria(inp.monthly_usage_kwh, params),
        produccion=produccion,
        consumo=dividir_consumo(inp.monthly_usage_kwh, params),
        clima=resumen_clima(factores, produccion),
        metadatos=_metadatos(inp, params, ahora),
    )
