# core/orquestador.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .configuracion import ParametrosCotizacion, cargar_parametros
from .errores import NoSuitableEquipmentError, SolarSizingError, ValidationError
from .sizing import calcular_sizing_unificado
from .validacion import validar_entrada

from electrical.catalogos import FuenteCatalogo

logger = logging.getLogger(__name__)

MENSAJE_ERROR_INTERNO = "Failed to calculate system size"


# ==========================================================
# ENTRYPOINT (payload JSON → respuesta JSON)
# ==========================================================

def ejecutar_cotizacion(
    payload: Mapping[str, Any],
    *,
    fuente: Optional[FuenteCatalogo] = None,
    params: Optional[ParametrosCotizacion] = None,
    intentos_catalogo: int = 1,
) -> Dict[str, Any]:
    """
    Valida, calcula y serializa.
    Errores tipados (ValidationError, NoSuitableEquipmentError) se propagan.
    """
    params = params or cargar_parametros()
    inp = validar_entrada(payload, params)
    res = calcular_sizing_unificado(
        inp,
        fuente=fuente,
        params=params,
        intentos_catalogo=intentos_catalogo,
    )
    return res.a_dict()


def _cuerpo_error(e: Exception, mensaje: str) -> Dict[str, Any]:
    return {"error": mensaje, "errorType": type(e).__name__}


def responder(
    payload: Mapping[str, Any],
    *,
    fuente: Optional[FuenteCatalogo] = None,
    params: Optional[ParametrosCotizacion] = None,
    intentos_catalogo: int = 1,
) -> Tuple[int, Dict[str, Any]]:
    """
    Frontera HTTP-equivalente: (status, body).
      200 resultado | 400 validación / sin equipo | 500 genérico
    """
    try:
        body = ejecutar_cotizacion(
            payload,
            fuente=fuente,
            params=params,
            intentos_catalogo=intentos_catalogo,
        )
        return 200, body
    except (ValidationError, NoSuitableEquipmentError) as e:
        logger.info("Cotización rechazada: %s", e)
        return 400, _cuerpo_error(e, str(e))
    except SolarSizingError as e:
        logger.exception("Error del motor de cotización")
        return 500, _cuerpo_error(e, str(e))
    except Exception as e:
        logger.exception("Error inesperado calculando cotización")
        return 500, _cuerpo_error(e, MENSAJE_ERROR_INTERNO)
