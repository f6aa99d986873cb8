# core/contrato.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .rutas import redondear


# =============================
# Rango / eficiencia
# =============================

@dataclass(frozen=True)
class RangoRecomendado:
    minimo: float
    recomendado: float
    maximo: float


@dataclass(frozen=True)
class FactoresEficiencia:
    eficiencia_sistema: float     # fracción (0, 1]
    irradiancia: float            # HSP de la ubicación
    orientacion: float
    techo: float
    sombreado: float
    temperatura: float
    inversor: float


# =============================
# Equipos
# =============================

@dataclass(frozen=True)
class OpcionPanel:
    id: str
    marca: str
    potencia_w: float
    precio_unitario: float
    cantidad: int
    area_techo_m2: float
    costo_total: float
    default_choice: bool


@dataclass(frozen=True)
class OpcionInversor:
    id: str
    marca: str
    potencia_kw: float
    precio_unitario: float
    cantidad: int
    costo_total: float
    eficiencia: float


@dataclass(frozen=True)
class Equipos:
    paneles: List[OpcionPanel]
    inversores: List[OpcionInversor]
    panel_seleccionado: OpcionPanel
    inversor_seleccionado: OpcionInversor


# =============================
# Costos
# =============================

@dataclass(frozen=True)
class Costos:
    paneles: float
    inversor: float
    cable_dc: float
    cable_ac: float
    montaje: float
    instalacion: float
    net_metering: float
    transporte: float
    longitud_cable_m: int

    @property
    def total(self) -> float:
        return (
            self.paneles
            + self.inversor
            + self.cable_dc
            + self.cable_ac
            + self.montaje
            + self.instalacion
            + self.net_metering
            + self.transporte
        )


# =============================
# Techo / batería / energía
# =============================

@dataclass(frozen=True)
class Techo:
    area_requerida_m2: float
    eficiencia_layout_pct: float
    orientacion: str
    impacto_sombra_pct: float


@dataclass(frozen=True)
class Bateria:
    capacidad_kwh: float
    autonomia_dias: int
    costo_estimado: float
    eficiencia: float
    vida_anios: int


@dataclass(frozen=True)
class Produccion:
    diaria_kwh: float
    mensual_kwh: float
    anual_kwh: float
    por_mes_kwh: List[float]
    horas_sol_pico: float


@dataclass(frozen=True)
class Consumo:
    mensual_kwh: float
    pico_pct: float
    pico_kwh: float
    pico_horario: str
    fuera_pico_kwh: float


@dataclass(frozen=True)
class Clima:
    horas_sol: float
    eficiencia_pct: float
    impacto_temperatura_pct: float
    produccion_anual_kwh: float


@dataclass(frozen=True)
class Metadatos:
    version: str
    fecha_calculo: str        # ISO-8601 UTC
    ubicacion: str
    orientacion: str
    tipo_techo: str
    sombreado: str
    tamano_forzado_kw: Optional[float] = None


# =============================
# Resultado final
# =============================

@dataclass(frozen=True)
class SizingResult:
    tamano_sistema_kw: float
    rango: RangoRecomendado
    eficiencia: FactoresEficiencia
    equipos: Equipos
    costos: Costos
    techo: Techo
    bateria: Bateria
    produccion: Produccion
    consumo: Consumo
    clima: Clima
    metadatos: Metadatos

    def a_dict(self) -> Dict[str, Any]:
        """Forma canónica (JSON) de la respuesta."""
        return {
            "systemSize": self.tamano_sistema_kw,
            "recommendedRange": {
                "minimum": self.rango.minimo,
                "recommended": self.rango.recomendado,
                "maximum": self.rango.maximo,
            },
            "efficiencyFactors": _factores_dict(self.eficiencia),
            "equipment": {
                "panelOptions": [_panel_dict(p) for p in self.equipos.paneles],
                "inverters": [_inversor_dict(i) for i in self.equipos.inversores],
                "selectedPanel": _panel_dict(self.equipos.panel_seleccionado),
                "selectedInverter": _inversor_dict(self.equipos.inversor_seleccionado),
            },
            "costs": {
                "panels": self.costos.paneles,
                "inverter": self.costos.inversor,
                "dcCable": self.costos.cable_dc,
                "acCable": self.costos.cable_ac,
                "mounting": self.costos.montaje,
                "installation": self.costos.instalacion,
                "netMetering": self.costos.net_metering,
                "transport": self.costos.transporte,
                "total": self.costos.total,
            },
            "roof": {
                "requiredArea": self.techo.area_requerida_m2,
                "layoutEfficiency": self.techo.eficiencia_layout_pct,
                "orientation": self.techo.orientacion,
                "shadingImpact": self.techo.impacto_sombra_pct,
            },
            "battery": {
                "recommendedCapacity": self.bateria.capacidad_kwh,
                "autonomyDays": self.bateria.autonomia_dias,
                "estimatedCost": self.bateria.costo_estimado,
                "efficiencyRating": self.bateria.eficiencia,
                "lifespanYears": self.bateria.vida_anios,
            },
            "production": {
                "daily": redondear(self.produccion.diaria_kwh),
                "monthly": redondear(self.produccion.mensual_kwh),
                "annual": redondear(self.produccion.anual_kwh),
                "byMonth": [redondear(x) for x in self.produccion.por_mes_kwh],
                "peakSunHours": self.produccion.horas_sol_pico,
            },
            "consumption": {
                "monthly": self.consumo.mensual_kwh,
                "peak": {
                    "percentage": self.consumo.pico_pct,
                    "kWh": self.consumo.pico_kwh,
                    "time": self.consumo.pico_horario,
                },
                "offPeak": self.consumo.fuera_pico_kwh,
            },
            "weather": {
                "sunHours": self.clima.horas_sol,
                "efficiency": self.clima.eficiencia_pct,
                "temperatureImpact": self.clima.impacto_temperatura_pct,
                "annualProduction": redondear(self.clima.produccion_anual_kwh),
            },
            "metadata": {
                "calculationVersion": self.metadatos.version,
                "calculationDate": self.metadatos.fecha_calculo,
                "location": self.metadatos.ubicacion,
                "roofDirection": self.metadatos.orientacion,
                "roofType": self.metadatos.tipo_techo,
                "shading": self.metadatos.sombreado,
                "forceSize": self.metadatos.tamano_forzado_kw,
            },
        }


# ==========================================================
# Helpers de serialización
# ==========================================================

def _pct(x: float) -> int:
    return redondear(float(x) * 100)


def _factores_dict(f: FactoresEficiencia) -> Dict[str, Any]:
    return {
        "systemEfficiency": _pct(f.eficiencia_sistema),
        "irradiance": f.irradiancia,
        "direction": _pct(f.orientacion),
        "roofType": _pct(f.techo),
        "shading": _pct(f.sombreado),
        "temperature": _pct(f.temperatura),
        "inverter": _pct(f.inversor),
    }


def _panel_dict(p: OpcionPanel) -> Dict[str, Any]:
    return {
        "id": p.id,
        "brand": p.marca,
        "power": p.potencia_w,
        "unitPrice": p.precio_unitario,
        "count": p.cantidad,
        "roofArea": p.area_techo_m2,
        "totalCost": p.costo_total,
        "defaultChoice": p.default_choice,
    }


def _inversor_dict(i: OpcionInversor) -> Dict[str, Any]:
    return {
        "id": i.id,
        "brand": i.marca,
        "power": i.potencia_kw,
        "unitPrice": i.precio_unitario,
        "count": i.cantidad,
        "totalCost": i.costo_total,
        "efficiencyRating": i.eficiencia,
    }
