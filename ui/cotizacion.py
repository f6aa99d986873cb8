# ui/cotizacion.py
from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from core.configuracion import cargar_parametros
from core.factura import entrada_desde_factura, factura_desde_dict, tarifa_efectiva
from core.modelo import Orientacion, Sombreado, TipoTecho, Ubicacion
from core.orquestador import responder
from core.result_accessors import (
    get_annual_production,
    get_costs,
    get_panel_count,
    get_production_by_month,
    get_selected_inverter,
    get_selected_panel,
    get_system_size,
    get_total_cost,
)
from core.rutas import kw, money_PKR, num
from core.errores import ValidationError


_MESES = ["Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"]

_DEFAULTS_SITIO = {
    "location": Ubicacion.CENTRAL_PAKISTAN.value,
    "roofDirection": Orientacion.SOUTH.value,
    "roofType": TipoTecho.STANDARD.value,
    "shading": Sombreado.MINIMAL.value,
}

_DEFAULTS_CONSUMO = {
    "fuente": "manual",
    "monthlyUsage": 600.0,
    "factura": {},
}

_ETIQUETAS_COSTOS = [
    ("panels", "Paneles"),
    ("inverter", "Inversor"),
    ("dcCable", "Cable DC"),
    ("acCable", "Cable AC"),
    ("mounting", "Estructura"),
    ("installation", "Instalación"),
    ("netMetering", "Net metering"),
    ("transport", "Transporte"),
]


# ==========================================================
# Contexto (puro, sin streamlit)
# ==========================================================

def preparar_ctx(ctx) -> None:
    for nombre, defaults in (("sitio", _DEFAULTS_SITIO), ("consumo", _DEFAULTS_CONSUMO), ("equipos", {})):
        actual = getattr(ctx, nombre, None)
        if not isinstance(actual, dict):
            actual = {}
            setattr(ctx, nombre, actual)
        for k, v in defaults.items():
            actual.setdefault(k, dict(v) if isinstance(v, dict) else v)


def payload_desde_ctx(ctx) -> Dict[str, Any]:
    s = ctx.sitio
    c = ctx.consumo
    eq = ctx.equipos

    if c.get("fuente") == "factura":
        payload = entrada_desde_factura(
            factura_desde_dict(c.get("factura") or {}),
            location=s.get("location"),
            roof_direction=s.get("roofDirection"),
            roof_type=s.get("roofType"),
            shading=s.get("shading"),
        )
    else:
        payload = {"monthlyUsage": c.get("monthlyUsage"), **{k: s.get(k) for k in _DEFAULTS_SITIO}}

    for k in ("forceSize", "panelId", "inverterId"):
        if eq.get(k) not in (None, ""):
            payload[k] = eq[k]
    return payload


def validar(ctx) -> Tuple[bool, List[str]]:
    errores: List[str] = []
    c = ctx.consumo

    if c.get("fuente") == "factura":
        try:
            f = factura_desde_dict(c.get("factura") or {})
        except ValidationError as e:
            return False, [str(e)]
        if f.units_consumed <= 0:
            errores.append("La factura debe tener unidades consumidas mayores que 0 kWh.")
    else:
        try:
            uso = float(c.get("monthlyUsage") or 0.0)
        except (TypeError, ValueError):
            return False, ["Consumo inválido: debe ser numérico."]
        if uso <= 0:
            errores.append("Ingrese un consumo mensual mayor que 0 kWh.")

    return (len(errores) == 0), errores


# ==========================================================
# Resultado vigente = misma solicitud que se envió a responder()
# ==========================================================

def huella_solicitud(payload: Dict[str, Any]) -> str:
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def _huella_actual(ctx) -> Optional[str]:
    try:
        return huella_solicitud(payload_desde_ctx(ctx))
    except ValidationError:
        # factura incompleta: no hay solicitud válida que comparar
        return None


def resultado_desactualizado(ctx) -> bool:
    guardada = getattr(ctx, "huella_resultado", None)
    if not guardada:
        return False
    return _huella_actual(ctx) != guardada


# ==========================================================
# Render
# ==========================================================

def _render_sitio(ctx) -> None:
    s = ctx.sitio
    st.markdown("### Sitio")
    col1, col2 = st.columns(2)
    with col1:
        ubic = [u.value for u in Ubicacion]
        s["location"] = st.selectbox("Ubicación", ubic, index=ubic.index(s["location"]))
        orient = [o.value for o in Orientacion]
        s["roofDirection"] = st.selectbox("Orientación del techo", orient, index=orient.index(s["roofDirection"]))
    with col2:
        techos = [t.value for t in TipoTecho]
        s["roofType"] = st.selectbox("Tipo de techo", techos, index=techos.index(s["roofType"]))
        sombras = [x.value for x in Sombreado]
        s["shading"] = st.selectbox("Sombreado", sombras, index=sombras.index(s["shading"]))


def _render_consumo(ctx) -> None:
    c = ctx.consumo
    st.markdown("### Consumo")
    c["fuente"] = st.radio(
        "Fuente de datos",
        options=["manual", "factura"],
        index=0 if c.get("fuente") != "factura" else 1,
        horizontal=True,
    )

    if c["fuente"] == "manual":
        c["monthlyUsage"] = st.number_input(
            "Consumo mensual (kWh)",
            min_value=0.0,
            step=10.0,
            value=float(c.get("monthlyUsage") or 0.0),
        )
        return

    f = dict(c.get("factura") or {})
    col1, col2 = st.columns(2)
    with col1:
        f["customerName"] = st.text_input("Cliente", f.get("customerName", ""))
        f["unitsConsumed"] = st.number_input("Unidades consumidas (kWh)", min_value=0.0, step=10.0,
                                             value=float(f.get("unitsConsumed") or 0.0))
        f["amount"] = st.number_input("Monto (PKR)", min_value=0.0, step=100.0, value=float(f.get("amount") or 0.0))
    with col2:
        f["issueDate"] = st.text_input("Fecha de emisión", f.get("issueDate", ""))
        f["dueDate"] = st.text_input("Fecha de vencimiento", f.get("dueDate", ""))
    c["factura"] = f


def _calcular(ctx) -> None:
    payload = payload_desde_ctx(ctx)
    status, body = responder(payload, params=cargar_parametros())
    if status == 200:
        ctx.resultado = body
        ctx.error = None
        ctx.huella_resultado = huella_solicitud(payload)
    else:
        ctx.resultado = None
        ctx.error = body.get("error")


def _tabla_costos(res: Dict[str, Any]) -> pd.DataFrame:
    costos = get_costs(res)
    filas = [{"Concepto": etiqueta, "Monto": money_PKR(float(costos.get(k, 0.0)))} for k, etiqueta in _ETIQUETAS_COSTOS]
    filas.append({"Concepto": "Total", "Monto": money_PKR(get_total_cost(res))})
    return pd.DataFrame(filas)


def _tabla_paneles(res: Dict[str, Any]) -> pd.DataFrame:
    opciones = (res.get("equipment") or {}).get("panelOptions") or []
    return pd.DataFrame(
        [
            {
                "Marca": o["brand"],
                "W": o["power"],
                "Cantidad": o["count"],
                "Área (m²)": o["roofArea"],
                "Costo": money_PKR(o["totalCost"]),
                "Default": "✅" if o.get("defaultChoice") else "",
            }
            for o in opciones
        ]
    )


def _render_resultado(ctx) -> None:
    res = getattr(ctx, "resultado", None)
    if not res:
        return

    if resultado_desactualizado(ctx):
        st.warning("Los datos cambiaron desde el último cálculo. Recalcule la cotización.")

    panel = get_selected_panel(res)
    inv = get_selected_inverter(res)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Sistema", kw(get_system_size(res)))
    c2.metric("Paneles", f"{get_panel_count(res)} × {num(float(panel.get('power', 0)), 0)} W")
    c3.metric("Inversor", f"{inv.get('count', 0)} × {kw(float(inv.get('power', 0)))}")
    c4.metric("Total", money_PKR(get_total_cost(res)))

    rango = res.get("recommendedRange") or {}
    st.caption(
        f"Rango recomendado: {kw(rango.get('minimum', 0))} – {kw(rango.get('maximum', 0))} "
        f"(recomendado {kw(rango.get('recommended', 0))})"
    )

    # Ajuste de tamaño = recalcular con forceSize
    p = cargar_parametros()
    actual = min(max(get_system_size(res), p.tamano_forzado_min_kw), p.tamano_forzado_max_kw)
    nuevo = st.slider("Ajustar tamaño (kW)", p.tamano_forzado_min_kw, p.tamano_forzado_max_kw, float(actual), 0.5)
    if st.button("Recalcular con este tamaño"):
        ctx.equipos["forceSize"] = float(nuevo)
        _calcular(ctx)
        st.rerun()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### Costos")
        st.dataframe(_tabla_costos(res), hide_index=True, use_container_width=True)
    with col2:
        st.markdown("#### Opciones de panel")
        st.dataframe(_tabla_paneles(res), hide_index=True, use_container_width=True)

    st.markdown("#### Producción estimada (kWh/mes)")
    prod = pd.DataFrame({"Mes": _MESES, "kWh": get_production_by_month(res)}).set_index("Mes")
    st.bar_chart(prod)
    st.caption(f"Producción anual ≈ {num(get_annual_production(res), 0)} kWh")

    bat = res.get("battery") or {}
    st.info(
        f"Batería sugerida: {num(float(bat.get('recommendedCapacity', 0)), 1)} kWh "
        f"(~{money_PKR(float(bat.get('estimatedCost', 0)))}, referencial)"
    )


def render(ctx) -> None:
    preparar_ctx(ctx)

    _render_sitio(ctx)
    _render_consumo(ctx)

    ok, errores = validar(ctx)
    for e in errores:
        st.error(e)

    if ok and ctx.consumo.get("fuente") == "factura":
        f = factura_desde_dict(ctx.consumo["factura"])
        st.caption(f"Tarifa efectiva: {num(tarifa_efectiva(f), 2)} PKR/kWh")

    if st.button("Calcular cotización", type="primary", disabled=not ok):
        ctx.equipos.pop("forceSize", None)
        _calcular(ctx)

    if getattr(ctx, "error", None):
        st.error(ctx.error)

    _render_resultado(ctx)
