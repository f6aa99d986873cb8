# electrical/catalogos/catalogos_yaml.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List
import yaml

from .modelos import Panel, Inversor

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        x = float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e
    if x <= 0:
        raise ValueError(f"'{k}' debe ser > 0 en {ctx}. Valor={v!r}")
    return x


def _opt_bool(d: Dict[str, Any], k: str, default: bool) -> bool:
    v = d.get(k)
    return default if v is None else bool(v)


def _validate_panel(pid: str, p: Dict[str, Any]) -> None:
    if not isinstance(p, dict):
        raise ValueError(f"paneles.{pid} debe ser un mapa")
    _req(p, "marca", f"paneles.{pid}")
    _req_num(p, "potencia_w", f"paneles.{pid}")
    _req_num(p, "precio", f"paneles.{pid}")


def _validate_inversor(iid: str, inv: Dict[str, Any]) -> None:
    if not isinstance(inv, dict):
        raise ValueError(f"inversores.{iid} debe ser un mapa")
    _req(inv, "marca", f"inversores.{iid}")
    _req_num(inv, "potencia_kw", f"inversores.{iid}")
    _req_num(inv, "precio", f"inversores.{iid}")


def cargar_paneles_yaml(path: str = "paneles.yaml", data_dir: Path = DATA_DIR) -> List[Panel]:
    doc = _read_yaml(Path(data_dir) / path)
    paneles = (doc.get("paneles") or {}) if isinstance(doc, dict) else {}

    out: List[Panel] = []
    for pid, p in paneles.items():
        _validate_panel(pid, p)
        out.append(
            Panel(
                id=str(pid),
                marca=str(p["marca"]).strip(),
                potencia_w=float(p["potencia_w"]),
                precio=float(p["precio"]),
                default_choice=_opt_bool(p, "default_choice", False),
                disponible=_opt_bool(p, "disponible", True),
            )
        )
    return out


def cargar_inversores_yaml(path: str = "inversores.yaml", data_dir: Path = DATA_DIR) -> List[Inversor]:
    doc = _read_yaml(Path(data_dir) / path)
    inversores = (doc.get("inversores") or {}) if isinstance(doc, dict) else {}

    out: List[Inversor] = []
    for iid, inv in inversores.items():
        _validate_inversor(iid, inv)
        out.append(
            Inversor(
                id=str(iid),
                marca=str(inv["marca"]).strip(),
                potencia_kw=float(inv["potencia_kw"]),
                precio=float(inv["precio"]),
                disponible=_opt_bool(inv, "disponible", True),
            )
        )
    return out
