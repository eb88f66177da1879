import logging
from pathlib import Path

from pydantic_settings import BaseSettings

from config import settings

logger = logging.getLogger(__name__)


class KeyEnvironment(BaseSettings):
    """API key environment variables, re-read on every instantiation."""

    openai_api_key: str = ""
    open_ai_key: str = ""
    open_ai_key_file: str = ""

    model_config = {"extra": "ignore"}


def _read_key_file(path: str) -> str | None:
    try:
        text = Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError, ValueError):
        return None
    return text or None


def resolve_api_key() -> str | None:
    """Return the first non-empty API key found, or None.

    Order: OPENAI_API_KEY, OPEN_AI_KEY, the file named by OPEN_AI_KEY_FILE,
    the local key file, then the secret mount.
    """
    env = KeyEnvironment()

    for value in (env.openai_api_key, env.open_ai_key):
        if value.strip():
            return value.strip()

    candidates = []
    if env.open_ai_key_file:
        candidates.append(env.open_ai_key_file)
    candidates += [settings.local_key_file, settings.secret_key_file]

    for path in candidates:
        key = _read_key_file(path)
        if key:
            logger.debug("API key loaded from file %s", path)
            return key
    return None
