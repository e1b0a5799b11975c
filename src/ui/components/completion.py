"""
Completion component: send a prompt to the proxy and render the reply live.
"""

import streamlit as st

from src.ui.api_client import APIError, get_api_client


def render_completion(default_prompt: str = "") -> None:
    """Show a prompt box and stream the proxy's answer beneath it."""
    prompt = st.text_area(
        "Prompt",
        value=default_prompt,
        height=150,
        placeholder="Ask something about the transcript...",
    )

    if not st.button("Send", disabled=not prompt.strip()):
        return

    client = get_api_client(st.session_state.api_base_url)
    try:
        st.write_stream(client.stream_completion(prompt))
    except APIError as exc:
        st.error(f"Completion failed: {exc.message}")
