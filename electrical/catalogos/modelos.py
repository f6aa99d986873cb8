# electrical/catalogos/modelos.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Panel:
    id: str
    marca: str
    potencia_w: float
    precio: float                  # precio unitario (moneda local)
    default_choice: bool = False
    disponible: bool = True


@dataclass(frozen=True)
class Inversor:
    id: str
    marca: str
    potencia_kw: float
    precio: float
    disponible: bool = True
