# electrical/catalogos/catalogos.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Protocol, TypeVar

import yaml

from core.errores import CatalogUnavailableError
from core.reintentos import con_reintentos

from .modelos import Panel, Inversor
from .catalogos_yaml import DATA_DIR, cargar_paneles_yaml, cargar_inversores_yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ==========================================================
# Equipos de respaldo (si la fuente no responde o viene vacía)
# ==========================================================

PANELES_RESPALDO: List[Panel] = [
    Panel(id="panel_respaldo_450w", marca="Default Panel", potencia_w=450.0, precio=45000.0, default_choice=True),
]

INVERSORES_RESPALDO: List[Inversor] = [
    Inversor(id="inv_respaldo_5kw", marca="Default Inverter", potencia_kw=5.0, precio=120000.0),
    Inversor(id="inv_respaldo_10kw", marca="Default Inverter", potencia_kw=10.0, precio=180000.0),
    Inversor(id="inv_respaldo_15kw", marca="Default Inverter", potencia_kw=15.0, precio=250000.0),
]


# ==========================================================
# Puerto de lectura (colaborador externo)
# ==========================================================

class FuenteCatalogo(Protocol):
    def paneles_disponibles(self) -> List[Panel]: ...

    def inversores_disponibles(self, potencia_min_kw: float) -> List[Inversor]: ...


def _consulta_paneles(paneles: Iterable[Panel]) -> List[Panel]:
    # disponibles, por potencia ascendente (orden estable)
    return sorted((p for p in paneles if p.disponible), key=lambda p: p.potencia_w)


def _consulta_inversores(inversores: Iterable[Inversor], potencia_min_kw: float) -> List[Inversor]:
    # disponibles con potencia >= mínima, por precio ascendente (orden estable)
    ok = [i for i in inversores if i.disponible and i.potencia_kw >= float(potencia_min_kw)]
    return sorted(ok, key=lambda i: i.precio)


class CatalogoEnMemoria:
    """Fuente en memoria (tests, callers que ya traen el catálogo)."""

    def __init__(self, paneles: Iterable[Panel] = (), inversores: Iterable[Inversor] = ()):
        self._paneles = list(paneles)
        self._inversores = list(inversores)

    def paneles_disponibles(self) -> List[Panel]:
        return _consulta_paneles(self._paneles)

    def inversores_disponibles(self, potencia_min_kw: float) -> List[Inversor]:
        return _consulta_inversores(self._inversores, potencia_min_kw)


class CatalogoYAML:
    """Fuente basada en data/paneles.yaml y data/inversores.yaml."""

    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def _cargar(self, fn: Callable[..., List[T]], nombre: str) -> List[T]:
        try:
            return fn(nombre, data_dir=self.data_dir)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise CatalogUnavailableError(f"{self.data_dir / nombre}: {e}") from e

    def paneles_disponibles(self) -> List[Panel]:
        return _consulta_paneles(self._cargar(cargar_paneles_yaml, "paneles.yaml"))

    def inversores_disponibles(self, potencia_min_kw: float) -> List[Inversor]:
        return _consulta_inversores(self._cargar(cargar_inversores_yaml, "inversores.yaml"), potencia_min_kw)


# ==========================================================
# Lectura tolerante (snapshot por cálculo)
# ==========================================================

@dataclass(frozen=True)
class CatalogoLeido:
    paneles: List[Panel]
    inversores: List[Inversor]
    respaldo_paneles: bool = False
    respaldo_inversores: bool = False


# errores transitorios: se reintentan; cualquier otro error de la fuente cae directo al respaldo
_ERRORES_TRANSITORIOS = (CatalogUnavailableError, OSError)


def _leer(fn: Callable[[], List[T]], *, intentos: int, espera_base_s: float) -> List[T]:
    return con_reintentos(
        fn,
        intentos=intentos,
        espera_base_s=espera_base_s,
        reintentar_en=_ERRORES_TRANSITORIOS,
    )


def leer_catalogo(
    fuente: FuenteCatalogo,
    tamano_kw: float,
    *,
    intentos: int = 1,
    espera_base_s: float = 0.0,
) -> CatalogoLeido:
    """
    Lee paneles e inversores (potencia >= tamano_kw).
    Cualquier error de la fuente, o una respuesta vacía => equipos de respaldo + warning.
    Solo los errores transitorios se reintentan.
    """
    respaldo_pan = False
    try:
        paneles = [p for p in _leer(fuente.paneles_disponibles, intentos=intentos, espera_base_s=espera_base_s)
                   if p.disponible]
    except Exception as e:
        logger.warning("Error leyendo paneles (%s); se usan paneles de respaldo", e, exc_info=True)
        paneles = []
    if not paneles:
        logger.warning("Sin paneles disponibles en catálogo; se usan paneles de respaldo")
        paneles = list(PANELES_RESPALDO)
        respaldo_pan = True

    respaldo_inv = False
    try:
        inversores = _leer(lambda: fuente.inversores_disponibles(tamano_kw),
                           intentos=intentos, espera_base_s=espera_base_s)
        inversores = [i for i in inversores if i.disponible and i.potencia_kw >= tamano_kw]
    except Exception as e:
        logger.warning("Error leyendo inversores (%s); se usan inversores de respaldo", e, exc_info=True)
        inversores = []
    if not inversores:
        logger.warning("Sin inversores >= %s kW en catálogo; se usan inversores de respaldo", tamano_kw)
        inversores = _consulta_inversores(INVERSORES_RESPALDO, tamano_kw)
        respaldo_inv = True

    return CatalogoLeido(
        paneles=paneles,
        inversores=inversores,
        respaldo_paneles=respaldo_pan,
        respaldo_inversores=respaldo_inv,
    )
