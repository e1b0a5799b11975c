"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """WhisperLive application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        groq_api_key: Server-side credential for the completion proxy.
        groq_transcription_api_key: Credential used by the recorder to upload
            audio. It lives in the client environment by construction.
        llm_provider: Which completion backend the proxy streams from.
        transcription_url: External speech-to-text endpoint.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Completion proxy ---
    # Selects the upstream: "groq" (default), "ollama" for local models, "claude"
    llm_provider: str = "groq"

    # Groq (server-only credential, never returned to callers)
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com"
    completion_model: str = "mixtral-8x7b-32768"

    # Ollama (local LLM) settings
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # Claude (Anthropic API) settings
    claude_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    claude_max_tokens: int = 1024

    # --- Transcription upload ---
    # Client-visible key; the recorder sends it as a bearer token
    groq_transcription_api_key: str = ""
    transcription_provider: str = "groq"
    transcription_url: str = "https://api.groq.com/openai/v1/audio/transcriptions"
    transcription_model: str = "whisper-large-v3"
    # Must match the container: the payload is always a PCM WAV built by
    # AudioProcessor.to_wav_bytes.
    transcription_filename: str = "audio.wav"
    transcription_timeout: float = 60.0

    # --- Microphone capture ---
    sample_rate: int = 16000
    channels: int = 1
    chunk_duration: float = 1.0  # Seconds of audio per delivered chunk
    capture_queue_size: int = 600  # Bounded producer queue (blocks)
    flush_timeout: float = 2.0  # Max wait for the end-of-stream signal

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    api_base_url: str = "http://localhost:8000"  # Used by the Streamlit UI
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]
    log_level: str = "INFO"  # Python logging level


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
