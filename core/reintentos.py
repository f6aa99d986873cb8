# core/reintentos.py
from __future__ import annotations

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def con_reintentos(
    fn: Callable[[], T],
    *,
    intentos: int = 3,
    espera_base_s: float = 1.0,
    reintentar_en: Tuple[Type[BaseException], ...] = (Exception,),
    dormir: Callable[[float], None] = time.sleep,
) -> T:
    """
    Ejecuta fn con backoff exponencial (espera_base_s * 2**intento).
    El contador vive en esta llamada; al agotar intentos relanza el último error.
    """
    if intentos < 1:
        raise ValueError("intentos debe ser >= 1")

    intento = 0
    while True:
        intento += 1
        try:
            return fn()
        except reintentar_en as e:
            if intento >= intentos:
                raise
            espera = float(espera_base_s) * (2 ** intento)
            logger.debug("Intento %s/%s falló (%s); reintento en %.2fs", intento, intentos, e, espera)
            dormir(espera)
