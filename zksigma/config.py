"""
zksigma Configuration
"""

from __future__ import annotations
import json
import logging
from logging.handlers import RotatingFileHandler
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from zksigma.errors import ConfigError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LogConfig:
    """Handlers attached to the ``zksigma`` logger by setup_logging()."""
    level: str = "WARNING"
    # Rotating log file; stderr when unset
    file: Optional[str] = None
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class ProofConfig:
    """
    Proof verification policy.

    Prover and verifier must agree on ``transcript_label``; an empty label
    keeps the per-proof default.
    """
    # Reject identity public keys up front with PUBKEY_IS_IDENTITY
    reject_identity_pubkeys: bool = False

    # Overrides the context label each proof bundle binds into its transcript
    transcript_label: str = ""

    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.log.level, str) or self.log.level.upper() not in _LOG_LEVELS:
            errors.append(f"Invalid log level: {self.log.level}")

        if not isinstance(self.log.max_size_mb, int) or self.log.max_size_mb < 1:
            errors.append("max_size_mb must be at least 1")

        if not isinstance(self.log.backup_count, int) or self.log.backup_count < 0:
            errors.append("backup_count cannot be negative")

        if not isinstance(self.transcript_label, str):
            errors.append("transcript_label must be a string")
        elif len(self.transcript_label.encode("utf-8")) > 255:
            errors.append("transcript_label too long")

        return errors

    def label_or(self, default: bytes) -> bytes:
        """Transcript label to use in place of ``default``."""
        if self.transcript_label:
            return self.transcript_label.encode("utf-8")
        return default

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "ProofConfig":
        """
        Load configuration from file.

        Raises:
            ConfigError: unreadable file, bad JSON, unknown keys or
                values that fail validate()
        """
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be an object")

        reject = data.get("reject_identity_pubkeys", False)
        if not isinstance(reject, bool):
            raise ConfigError(f"{path}: reject_identity_pubkeys must be a boolean")
        label = data.get("transcript_label", "")
        if not isinstance(label, str):
            raise ConfigError(f"{path}: transcript_label must be a string")

        try:
            config = cls(reject_identity_pubkeys=reject, transcript_label=label)
            if "log" in data:
                config.log = LogConfig(**data["log"])
        except TypeError as e:
            raise ConfigError(f"{path}: {e}") from e

        errors = config.validate()
        if errors:
            raise ConfigError(f"{path}: invalid configuration", details=errors)

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default(cls) -> "ProofConfig":
        return cls()

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "reject_identity_pubkeys": self.reject_identity_pubkeys,
            "transcript_label": self.transcript_label,
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> logging.Logger:
    """
    Configure the ``zksigma`` logger.

    Replaces handlers from an earlier call. The root logger is left alone
    and records still propagate to it.
    """
    package_logger = logging.getLogger("zksigma")
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.WARNING))

    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
        old.close()

    if config.file:
        handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.format))
    package_logger.addHandler(handler)
    return package_logger
