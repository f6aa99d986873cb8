# core/rutas.py
from __future__ import annotations

import math


def redondear(x: float, nd: int = 0):
    """
    Redondeo comercial: las mitades suben (2.5 -> 3, 10.5 -> 11).
    nd=0 devuelve int.
    """
    f = 10 ** nd
    v = math.floor(float(x) * f + 0.5)
    return int(v) if nd == 0 else v / f


def money_PKR(x: float, dec: int = 0) -> str:
    return f"Rs {x:,.{dec}f}"


def num(x: float, nd: int = 2) -> str:
    return f"{x:,.{nd}f}"


def kw(x: float) -> str:
    return f"{x:g} kW"
