# electrical/estimador.py
from __future__ import annotations

import math

from core.configuracion import ParametrosCotizacion
from core.contrato import (
    Bateria,
    Clima,
    Consumo,
    Costos,
    FactoresEficiencia,
    OpcionInversor,
    OpcionPanel,
    Produccion,
    Techo,
)
from core.rutas import redondear


# ==========================================================
# Costos
# ==========================================================

def longitud_cable_m(area_techo_m2: float) -> int:
    return int(math.ceil(math.sqrt(max(0.0, float(area_techo_m2))) * 4.0))


def estimar_costos(
    *,
    panel: OpcionPanel,
    inversor: OpcionInversor,
    params: ParametrosCotizacion,
) -> Costos:
    """
    Cada término se calcula por separado; Costos.total es su suma exacta.
    Cableado y montaje salen del panel seleccionado.
    """
    area = panel.cantidad * float(params.area_por_panel_m2)
    largo = longitud_cable_m(area)

    return Costos(
        paneles=panel.cantidad * panel.precio_unitario,
        inversor=inversor.cantidad * inversor.precio_unitario,
        cable_dc=largo * params.costo_cable_dc_m,
        cable_ac=largo * params.costo_cable_ac_m,
        montaje=panel.cantidad * params.costo_montaje_panel,
        instalacion=params.costo_instalacion,
        net_metering=params.costo_net_metering,
        transporte=params.costo_transporte,
        longitud_cable_m=largo,
    )


# ==========================================================
# Consumo / batería
# ==========================================================

def dividir_consumo(consumo_mensual_kwh: float, params: ParametrosCotizacion) -> Consumo:
    # supuesto fijo: 42% del consumo cae en la ventana pico
    pico = redondear(float(consumo_mensual_kwh) * params.pico_pct / 100.0)
    return Consumo(
        mensual_kwh=float(consumo_mensual_kwh),
        pico_pct=float(params.pico_pct),
        pico_kwh=float(pico),
        pico_horario=params.pico_horario,
        fuera_pico_kwh=float(consumo_mensual_kwh) - pico,
    )


def recomendar_bateria(consumo_mensual_kwh: float, params: ParametrosCotizacion) -> Bateria:
    """Heurística lineal de referencia; no es una optimización de respaldo."""
    consumo = float(consumo_mensual_kwh)
    return Bateria(
        capacidad_kwh=consumo * params.bateria_capacidad_factor,
        autonomia_dias=int(params.bateria_autonomia_dias),
        costo_estimado=consumo * params.bateria_costo_por_kwh_mes,
        eficiencia=float(params.bateria_eficiencia),
        vida_anios=int(params.bateria_vida_anios),
    )


# ==========================================================
# Techo / clima (para UI)
# ==========================================================

def resumen_techo(panel: OpcionPanel, factores: FactoresEficiencia, orientacion: str) -> Techo:
    return Techo(
        area_requerida_m2=panel.area_techo_m2,
        eficiencia_layout_pct=redondear(factores.techo * 100.0, 2),
        orientacion=str(orientacion),
        impacto_sombra_pct=redondear((1.0 - factores.sombreado) * 100.0, 2),
    )


def resumen_clima(factores: FactoresEficiencia, produccion: Produccion) -> Clima:
    return Clima(
        horas_sol=factores.irradiancia,
        eficiencia_pct=redondear(factores.eficiencia_sistema * 100.0),
        impacto_temperatura_pct=redondear((1.0 - factores.temperatura) * 100.0),
        produccion_anual_kwh=produccion.anual_kwh,
    )
