# =============================================================================
# core/config.py  —  Process configuration
# =============================================================================
#
# The bearer token is read ONCE at startup into a frozen OCRConfig and handed
# to the dispatcher.  A missing token is not an error at load time: the
# server still starts and lists its tools, and every tool call fails with
# ConfigurationError until the token is provided.
#
# .env files are loaded by the entry points (tools/mcp_server.py, main.py)
# with python-dotenv before load_config() runs.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

API_BASE_URL = "https://www.handwritingocr.com/api/v3"

TOKEN_ENV_VAR = "API_TOKEN"
LOG_LEVEL_ENV_VAR = "OCR_LOG_LEVEL"


@dataclass(frozen=True)
class OCRConfig:
    """Immutable settings shared by every tool call."""

    api_token: Optional[str] = None
    base_url: str = API_BASE_URL
    log_level: str = "INFO"

    def require_token(self) -> str:
        """Return the bearer token or raise ConfigurationError."""
        if not self.api_token:
            raise ConfigurationError(f"{TOKEN_ENV_VAR} environment variable is required")
        return self.api_token


def load_config(environ: Optional[Mapping[str, str]] = None) -> OCRConfig:
    """Build an OCRConfig from the environment (os.environ by default)."""
    env = os.environ if environ is None else environ
    token = (env.get(TOKEN_ENV_VAR) or "").strip() or None
    log_level = (env.get(LOG_LEVEL_ENV_VAR) or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"
    return OCRConfig(api_token=token, log_level=log_level)
