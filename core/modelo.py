# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ==========================================================
# Parámetros de sitio (valores cerrados)
# ==========================================================

class Ubicacion(str, Enum):
    NORTHERN_PAKISTAN = "Northern Pakistan"
    CENTRAL_PAKISTAN = "Central Pakistan"
    SOUTHERN_PAKISTAN = "Southern Pakistan"
    ISLAMABAD = "Islamabad"
    LAHORE = "Lahore"
    KARACHI = "Karachi"
    PESHAWAR = "Peshawar"
    QUETTA = "Quetta"


class Orientacion(str, Enum):
    SOUTH = "south"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"
    EAST = "east"
    WEST = "west"
    NORTH = "north"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"


class TipoTecho(str, Enum):
    FLAT = "flat"
    STANDARD = "standard"
    STEEP = "steep"
    OPTIMAL = "optimal"


class Sombreado(str, Enum):
    NONE = "none"
    MINIMAL = "minimal"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


UBICACION_DEFAULT = Ubicacion.CENTRAL_PAKISTAN
ORIENTACION_DEFAULT = Orientacion.SOUTH
TIPO_TECHO_DEFAULT = TipoTecho.STANDARD
SOMBREADO_DEFAULT = Sombreado.MINIMAL


# ==========================================================
# Entrada del motor
# ==========================================================

@dataclass(frozen=True)
class SizingInput:
    monthly_usage_kwh: float                      # kWh/mes (> 0)
    location: Ubicacion = UBICACION_DEFAULT
    roof_direction: Orientacion = ORIENTACION_DEFAULT
    roof_type: TipoTecho = TIPO_TECHO_DEFAULT
    shading: Sombreado = SOMBREADO_DEFAULT

    forced_size_kw: Optional[float] = None        # [1, 15] kW, omite sizing por consumo

    # equipos elegidos por el cliente (ids de catálogo)
    panel_id: Optional[str] = None
    inverter_id: Optional[str] = None

    @property
    def forzado(self) -> bool:
        return self.forced_size_kw is not None


# ==========================================================
# Factura (colaborador externo)
# ==========================================================

@dataclass(frozen=True)
class Factura:
    customer_name: str
    amount: float              # monto facturado
    units_consumed: float      # kWh del periodo
    issue_date: str
    due_date: str
