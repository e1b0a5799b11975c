"""
Ask page: stream a completion for the transcript (or any prompt) via the proxy.
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from src.ui.components.completion import render_completion  # noqa: E402
from src.ui.components.recorder import get_orchestrator  # noqa: E402

st.header("Ask")
render_completion(default_prompt=get_orchestrator().transcript.text)
