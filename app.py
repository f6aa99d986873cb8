# app.py
from __future__ import annotations

import sys
from pathlib import Path
import streamlit as st

# === asegurar imports del repo ===
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui import cotizacion


def _get_ctx():
    if "ctx" not in st.session_state:
        class Ctx: ...
        st.session_state["ctx"] = Ctx()
    return st.session_state["ctx"]


def main() -> None:
    st.set_page_config(page_title="Solar Quote", layout="wide")
    st.title("Cotización de sistema solar")
    cotizacion.render(_get_ctx())


main()
