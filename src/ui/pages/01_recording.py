"""
Recording page: capture microphone audio and append transcripts on demand.

UX flow: idle -> recording -> (generate transcript, recording resumes) -> idle
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from src.ui.components.recorder import render_recorder  # noqa: E402

st.header("Whisper Large V3 Live Integration")
render_recorder()
