# electrical/energia/eficiencia.py
from __future__ import annotations

from typing import Dict

from core.configuracion import ParametrosCotizacion
from core.contrato import FactoresEficiencia
from core.modelo import Orientacion, Sombreado, TipoTecho, Ubicacion


def _factor(tabla: Dict[str, float], clave: str, nombre: str) -> float:
    try:
        f = float(tabla[clave])
    except KeyError:
        raise ValueError(f"Tabla '{nombre}' no define '{clave}' (revise parametros_cotizacion.yaml)") from None
    if f <= 0:
        raise ValueError(f"Factor '{nombre}.{clave}' debe ser > 0")
    return f


def componer_eficiencia(
    *,
    ubicacion: Ubicacion,
    orientacion: Orientacion,
    tipo_techo: TipoTecho,
    sombreado: Sombreado,
    params: ParametrosCotizacion,
) -> FactoresEficiencia:
    """
    Cadena de derrateo: pérdidas fijas × orientación × techo × sombra.
    Producto simple, sin ponderar.
    """
    f_orient = _factor(params.eficiencia_orientacion, orientacion.value, "eficiencia_orientacion")
    f_techo = _factor(params.eficiencia_techo, tipo_techo.value, "eficiencia_techo")
    f_sombra = _factor(params.factor_sombreado, sombreado.value, "factor_sombreado")
    hsp = _factor(params.irradiancia, ubicacion.value, "irradiancia")

    eficiencia = params.perdidas_fijas * f_orient * f_techo * f_sombra

    return FactoresEficiencia(
        eficiencia_sistema=max(0.0, min(1.0, eficiencia)),
        irradiancia=hsp,
        orientacion=f_orient,
        techo=f_techo,
        sombreado=f_sombra,
        temperatura=params.perdidas_temperatura,
        inversor=params.eficiencia_inversor,
    )
