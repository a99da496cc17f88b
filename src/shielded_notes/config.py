"""
Runtime settings for the note service, read from environment variables.

    SHIELDED_NOTES_LOG_LEVEL     logging level name (default INFO)
    SHIELDED_NOTES_CORS_ORIGINS  comma-separated allowed origins (default: none, no cross-origin access)
    SHIELDED_NOTES_MAX_TX_NOTES  max nullifiers + commitments per signed transaction
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from shielded_notes.core.sighash import MAX_TRANSACTION_NOTES

ENV_PREFIX = "SHIELDED_NOTES_"


@dataclass
class Settings:
    """
    Service configuration.

    Args:
        log_level:      Root log level for the service
        cors_origins:   Origins allowed by the CORS middleware
        max_tx_notes:   Cap on nullifiers + output commitments in one sign request;
                        never above what a single sighash can absorb
    """
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=list)
    max_tx_notes: int = MAX_TRANSACTION_NOTES

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            raise ValueError(f"Unknown log level: {self.log_level}")
        if not 0 < self.max_tx_notes <= MAX_TRANSACTION_NOTES:
            raise ValueError(
                f"max_tx_notes must be in [1, {MAX_TRANSACTION_NOTES}], got {self.max_tx_notes}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        kwargs = {}
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            kwargs["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
        if f"{ENV_PREFIX}CORS_ORIGINS" in env:
            kwargs["cors_origins"] = [
                o.strip() for o in env[f"{ENV_PREFIX}CORS_ORIGINS"].split(",") if o.strip()
            ]
        if f"{ENV_PREFIX}MAX_TX_NOTES" in env:
            kwargs["max_tx_notes"] = int(env[f"{ENV_PREFIX}MAX_TX_NOTES"])
        return cls(**kwargs)


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the package logger at the given level."""
    logger = logging.getLogger("shielded_notes")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
