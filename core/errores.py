# core/errores.py
from __future__ import annotations


class SolarSizingError(Exception):
    """Base de todos los errores tipados del motor de cotización."""


class ValidationError(SolarSizingError, ValueError):
    """Entrada mal formada o fuera de rango (equivale a HTTP 400)."""

    def __init__(self, message: str, campo: str | None = None):
        super().__init__(f"Validation error: {message}")
        self.campo = campo


class NoSuitableEquipmentError(SolarSizingError):
    """Ningún inversor del catálogo cubre el tamaño resuelto."""

    def __init__(self, tamano_kw: float):
        super().__init__(f"No suitable inverter found for {tamano_kw:g}kW system")
        self.tamano_kw = float(tamano_kw)


class CatalogUnavailableError(SolarSizingError):
    """
    La fuente de catálogo falló o no es legible.
    Se recupera localmente con equipos de respaldo (ver electrical.catalogos).
    """

    def __init__(self, message: str):
        super().__init__(f"Catalog error: {message}")
