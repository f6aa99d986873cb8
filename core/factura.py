# core/factura.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .errores import ValidationError
from .modelo import Factura


def factura_desde_dict(d: Mapping[str, Any]) -> Factura:
    """Registro del colaborador de facturas: {customerName, amount, unitsConsumed, issueDate, dueDate}."""
    try:
        return Factura(
            customer_name=str(d["customerName"]).strip(),
            amount=float(d["amount"]),
            units_consumed=float(d["unitsConsumed"]),
            issue_date=str(d["issueDate"]),
            due_date=str(d["dueDate"]),
        )
    except KeyError as e:
        raise ValidationError(f"Bill is missing field {e.args[0]!r}", campo=str(e.args[0])) from None
    except (TypeError, ValueError):
        raise ValidationError("Bill amount and unitsConsumed must be numeric") from None


def entrada_desde_factura(
    factura: Factura,
    *,
    location: Optional[str] = None,
    roof_direction: Optional[str] = None,
    roof_type: Optional[str] = None,
    shading: Optional[str] = None,
    force_size: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Payload de sizing a partir de la factura (unidades del periodo = kWh/mes).
    La validación completa la hace core.validacion.validar_entrada.
    """
    payload: Dict[str, Any] = {"monthlyUsage": factura.units_consumed}
    opcionales = {
        "location": location,
        "roofDirection": roof_direction,
        "roofType": roof_type,
        "shading": shading,
        "forceSize": force_size,
    }
    payload.update({k: v for k, v in opcionales.items() if v is not None})
    return payload


def tarifa_efectiva(factura: Factura) -> float:
    """Monto / kWh facturados (0.0 si no hubo consumo)."""
    if factura.units_consumed <= 0:
        return 0.0
    return float(factura.amount) / float(factura.units_consumed)
