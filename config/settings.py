"""Central configuration loader for the PRD outline service."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
SCHEMAS_DIR = PROJECT_ROOT / "config" / "schemas"
TEMPLATES_DIR = PROJECT_ROOT / "templates"

# Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Schema file paths
OUTLINE_SCHEMA = SCHEMAS_DIR / "outline.schema.json"

# Completion provider configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4-turbo-preview")
OPENAI_MAX_TOKENS = os.getenv("OPENAI_MAX_TOKENS", "2000")
OPENAI_TEMPERATURE = os.getenv("OPENAI_TEMPERATURE", "0.7")

# Bearer tokens accepted by the auth gate, as "token:user_id,token:user_id"
AUTH_TOKENS = os.getenv("AUTH_TOKENS", "")


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing or invalid."""


def parse_auth_tokens(raw: str) -> dict[str, str]:
    """Parse the AUTH_TOKENS setting into a token -> user id mapping.

    Raises:
        ConfigurationError: If an entry is not of the form token:user_id.
    """
    tokens = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        token, sep, user_id = entry.partition(":")
        if not sep or not token.strip() or not user_id.strip():
            raise ConfigurationError(
                f"Invalid AUTH_TOKENS entry {entry!r}; expected token:user_id"
            )
        tokens[token.strip()] = user_id.strip()
    return tokens
