"""
Recorder component: Start / Stop / Generate Transcript controls.

States: idle -> recording (-> generating -> recording) -> idle

The ``TranscriptionOrchestrator`` lives in ``st.session_state`` so that the
capture handle and buffered chunks survive Streamlit reruns.
"""

import asyncio
import logging

import streamlit as st

from src.services.orchestrator import TranscriptionOrchestrator

logger = logging.getLogger(__name__)

TRANSCRIPT_PLACEHOLDER = "Generate transcript to see result here."


def get_orchestrator() -> TranscriptionOrchestrator:
    """Return this browser session's orchestrator, creating it on first use."""
    if st.session_state.get("orchestrator") is None:
        st.session_state.orchestrator = TranscriptionOrchestrator()
    return st.session_state.orchestrator


def render_recorder() -> None:
    """Render controls, transcript, and log for the current session."""
    orch = get_orchestrator()
    _render_controls(orch)
    _render_live_panels()


def _render_controls(orch: TranscriptionOrchestrator) -> None:
    recording = orch.is_recording
    col_start, col_stop, col_generate = st.columns(3)

    if col_start.button(
        "\U0001f3a4 Start Recording", disabled=recording, use_container_width=True
    ):
        if not orch.start():
            st.error("Could not access the microphone. See the log for details.")
        st.rerun()

    if col_stop.button(
        "⏹ Stop Recording", disabled=not recording, use_container_width=True
    ):
        orch.stop()
        st.rerun()

    if col_generate.button(
        "\U0001f4dd Generate Transcript", disabled=not recording, use_container_width=True
    ):
        with st.spinner("Transcribing..."):
            asyncio.run(
                orch.generate_transcript(language=st.session_state.transcription_language)
            )
        st.rerun()


@st.fragment(run_every=2.0)
def _render_live_panels() -> None:
    """Refresh transcript and log while chunks keep arriving."""
    snap = get_orchestrator().snapshot()

    st.subheader("Transcription")
    if snap.is_recording:
        st.caption(
            f"Recording... {snap.buffered_chunks} chunk(s), "
            f"{snap.buffered_bytes / 1024:.0f} KiB buffered"
        )
        # Speech RMS rarely exceeds 0.25 of full scale
        st.progress(min(snap.input_level * 4, 1.0), text="Input level")
    with st.container(height=200, border=True):
        st.markdown(snap.transcript or f"_{TRANSCRIPT_PLACEHOLDER}_")

    st.subheader("Logs")
    with st.container(height=200, border=True):
        st.code("\n".join(snap.log), language=None)
