# core/configuracion.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"
CONFIG_COTIZACION = CONFIG_DIR / "parametros_cotizacion.yaml"


# ==========================================================
# Tabla de calibración (constantes de política, no de física)
# ==========================================================

@dataclass(frozen=True)
class ParametrosCotizacion:
    # factores de sitio
    irradiancia: Dict[str, float] = field(default_factory=lambda: {
        "Northern Pakistan": 4.8,
        "Central Pakistan": 5.3,
        "Southern Pakistan": 5.7,
        "Islamabad": 5.3,
        "Lahore": 5.2,
        "Karachi": 5.6,
        "Peshawar": 5.4,
        "Quetta": 5.8,
    })
    eficiencia_orientacion: Dict[str, float] = field(default_factory=lambda: {
        "south": 1.00,
        "southeast": 0.96,
        "southwest": 0.96,
        "east": 0.88,
        "west": 0.88,
        "north": 0.75,
        "northeast": 0.78,
        "northwest": 0.78,
    })
    eficiencia_techo: Dict[str, float] = field(default_factory=lambda: {
        "flat": 0.90,
        "standard": 0.96,
        "steep": 0.93,
        "optimal": 1.00,  # 25-30° de inclinación
    })
    factor_sombreado: Dict[str, float] = field(default_factory=lambda: {
        "none": 1.00,
        "minimal": 0.95,
        "moderate": 0.85,
        "significant": 0.70,
    })

    # pérdidas fijas del sistema
    eficiencia_inversor: float = 0.96
    perdidas_cableado: float = 0.98
    perdidas_polvo: float = 0.95
    perdidas_temperatura: float = 0.91
    perdidas_mismatch: float = 0.97

    # sizing
    factor_confiabilidad_red: float = 1.05
    dias_mes: float = 30.5
    dias_anio: int = 365
    tamano_forzado_min_kw: float = 1.0
    tamano_forzado_max_kw: float = 15.0
    rango_min_factor: float = 0.8
    rango_max_factor: float = 1.2
    area_por_panel_m2: float = 1.8

    # costos (moneda local, enteros)
    costo_cable_dc_m: float = 300
    costo_cable_ac_m: float = 400
    costo_montaje_panel: float = 8000
    costo_instalacion: float = 25000
    costo_net_metering: float = 50000
    costo_transporte: float = 15000

    # perfil estacional Ene..Dic
    variacion_mensual: List[float] = field(default_factory=lambda: [
        0.85, 0.90, 1.00, 1.10, 1.15, 1.15, 1.05, 0.95, 1.05, 1.00, 0.90, 0.85,
    ])

    # consumo
    pico_pct: float = 42.0
    pico_horario: str = "6:00 PM - 9:00 PM"

    # batería (heurística lineal)
    bateria_capacidad_factor: float = 0.3
    bateria_autonomia_dias: int = 1
    bateria_costo_por_kwh_mes: float = 200
    bateria_eficiencia: float = 0.95
    bateria_vida_anios: int = 10

    version_calculo: str = "1.0"

    @property
    def perdidas_fijas(self) -> float:
        return (
            self.eficiencia_inversor
            * self.perdidas_cableado
            * self.perdidas_polvo
            * self.perdidas_temperatura
            * self.perdidas_mismatch
        )


# ==========================================================
# Lectura YAML
# ==========================================================

def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config inválida (debe ser dict): {path}")
    return data


def _validar_claves(data: Dict[str, Any], path: Path) -> None:
    conocidas = {f.name for f in fields(ParametrosCotizacion)}
    extra = sorted(set(data) - conocidas)
    if extra:
        raise ValueError(f"Claves desconocidas en {path}: {', '.join(extra)}")

    variacion = data.get("variacion_mensual")
    if variacion is not None and (not isinstance(variacion, list) or len(variacion) != 12):
        raise ValueError(f"variacion_mensual debe tener 12 valores (Ene..Dic) en {path}")


def _mezclar(base: ParametrosCotizacion, data: Dict[str, Any]) -> ParametrosCotizacion:
    # tablas (dict) se mezclan clave a clave; escalares y listas se reemplazan
    cambios: Dict[str, Any] = {}
    for k, v in data.items():
        actual = getattr(base, k)
        if isinstance(actual, dict) and isinstance(v, dict):
            cambios[k] = {**actual, **{str(kk): float(vv) for kk, vv in v.items()}}
        else:
            cambios[k] = v
    return replace(base, **cambios)


def cargar_parametros(path: Optional[Path] = None) -> ParametrosCotizacion:
    """
    Carga la tabla de calibración.
    Sin archivo => valores por defecto del dataclass.
    """
    path = Path(path) if path is not None else CONFIG_COTIZACION
    if not path.exists():
        return ParametrosCotizacion()

    data = _leer_yaml(path)
    _validar_claves(data, path)
    return _mezclar(ParametrosCotizacion(), data)


def construir_parametros_efectivos(
    base: ParametrosCotizacion,
    overrides: Optional[Dict[str, Any]],
) -> ParametrosCotizacion:
    if not overrides:
        return base
    _validar_claves(overrides, Path("<overrides>"))
    return _mezclar(base, overrides)
