"""
WhisperLive Streamlit UI main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.utils import configure_logging  # noqa: E402
from src.ui.api_client import get_api_client  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="WhisperLive",
    page_icon="\U0001f399️",
    layout="centered",
)

_settings = get_settings()
configure_logging(_settings.log_level)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": _settings.api_base_url,
    "orchestrator": None,
    "transcription_language": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
_LANGUAGE_OPTIONS = [
    ("Auto-detect", None),
    ("English (en)", "en"),
    ("한국어 (ko)", "ko"),
    ("日本語 (ja)", "ja"),
    ("Español (es)", "es"),
    ("Français (fr)", "fr"),
    ("Deutsch (de)", "de"),
]

with st.sidebar:
    st.title("\U0001f399️ WhisperLive")
    st.caption(f"Live transcription with {_settings.transcription_model}")
    st.divider()

    lang_labels = [label for label, _ in _LANGUAGE_OPTIONS]
    lang_values = [value for _, value in _LANGUAGE_OPTIONS]
    current = st.session_state.transcription_language
    selected_idx = st.selectbox(
        "Transcription language",
        range(len(lang_labels)),
        index=lang_values.index(current) if current in lang_values else 0,
        format_func=lambda i: lang_labels[i],
    )
    st.session_state.transcription_language = lang_values[selected_idx]

    st.session_state.api_base_url = st.text_input(
        "Completion proxy URL",
        value=st.session_state.api_base_url,
        help="URL of the WhisperLive FastAPI backend (default: http://localhost:8000)",
    )

    _conn_ok, _conn_msg = get_api_client(st.session_state.api_base_url).check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Navigation (multipage)
# ---------------------------------------------------------------------------
recording_page = st.Page(
    "pages/01_recording.py",
    title="Recording",
    icon="\U0001f3a4",
    default=True,
)
ask_page = st.Page(
    "pages/02_ask.py",
    title="Ask",
    icon="\U0001f4ac",
)

nav = st.navigation([recording_page, ask_page])
nav.run()
