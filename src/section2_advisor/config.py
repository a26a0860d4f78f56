"""
Configuration for Section 2: AI Advisor

Handles API credentials, model settings, retry policy
and digest parameters.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class AdvisorConfig:
    """Configuration for the Gemini remediation advisor."""

    # Environment fallback when no key has been saved locally
    GEMINI_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = "gemini-2.5-flash-preview-09-2025"
    API_URL: str = (
        f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent"
    )

    # Retry policy: delay = 2**attempt * BACKOFF_BASE_MS + uniform(0, BACKOFF_JITTER_MS)
    RETRY_ATTEMPTS: int = 3
    BACKOFF_BASE_MS: int = 1000
    BACKOFF_JITTER_MS: int = 500
    REQUEST_TIMEOUT_SECONDS: int = 30

    # Digest
    MAX_SUGGESTIONS_IN_DIGEST: int = 10
    DEFAULT_OS_NAME: str = "Linux"

    # Local credential storage
    HOME_DIR: Path = Path(os.getenv("LYNIS_ANALYZER_HOME", str(Path.home() / ".lynis_analyzer")))
    CREDENTIAL_FILE_NAME: str = "lynis_gemini_key"

    @classmethod
    def credential_path(cls) -> Path:
        return cls.HOME_DIR / cls.CREDENTIAL_FILE_NAME


class CredentialStore:
    """
    Locally persisted Gemini API key.

    Lifecycle: `load()` once at startup, `save()` / `clear()` on user
    action. The loaded value is handed to the reporter explicitly rather
    than read from a global.
    """

    def __init__(self, path: Path | None = None, env_fallback: Optional[str] = None):
        self.path = path or AdvisorConfig.credential_path()
        self.env_fallback = AdvisorConfig.GEMINI_API_KEY if env_fallback is None else env_fallback

    def load(self) -> Optional[str]:
        """Return the stored key, else the environment key, else None."""
        if self.path.exists():
            key = self.path.read_text(encoding="utf-8").strip()
            if key:
                return key
        return self.env_fallback or None

    def save(self, api_key: str) -> Optional[str]:
        """
        Persist a key. A blank key clears the stored one.

        Returns:
            The stored (trimmed) key, or None when cleared
        """
        api_key = (api_key or "").strip()
        if not api_key:
            self.clear()
            return None

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(api_key, encoding="utf-8")
        self.path.chmod(0o600)
        return api_key

    def clear(self) -> None:
        """Remove the stored key if present."""
        self.path.unlink(missing_ok=True)

    @property
    def is_configured(self) -> bool:
        return self.load() is not None
