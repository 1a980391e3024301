"""
Session Store Factory
Centralizes the logic for selecting the appropriate SessionStore adapter.
"""

import logging

from ascend.application.config import AppConfig
from ascend.domain.sessions.ports import SessionStore
from ascend.infrastructure.adapters.api_store import ApiSessionStore
from ascend.infrastructure.adapters.file_store import FileSessionStore

logger = logging.getLogger(__name__)


def get_session_store(config: AppConfig) -> SessionStore:
    """
    Returns the SessionStore implementation selected by ``config.backend``.
    """
    if config.backend == "api":
        logger.debug(f"Session store: API at {config.api_url}")
        token = config.api_token.get_secret_value() if config.api_token else None
        return ApiSessionStore(
            base_url=config.api_url,
            token=token,
            timeout=config.request_timeout,
        )

    logger.debug(f"Session store: file {config.sessions_file}")
    return FileSessionStore(config.sessions_file)
