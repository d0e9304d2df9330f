"""Resolve ring configuration from defaults, environment, and explicit overrides."""

from __future__ import annotations

import logging
import os
from typing import Any

from stringring.config_manager.helpers import parse_bytes
from stringring.config_manager.ring_config import RingConfig
from stringring.const import GRANULARITY_ENV_VAR, MAX_SIZE_ENV_VAR
from stringring.models import Granularity

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "max_size": MAX_SIZE_ENV_VAR,
    "granularity": GRANULARITY_ENV_VAR,
}


class ConfigManager:
    """Build the effective ring configuration from layered sources."""

    def __init__(self, base_config: RingConfig | None = None) -> None:
        """Initialise ConfigManager.

        Args:
            base_config: Configuration used before any overrides are applied.
                Defaults to ``RingConfig()``.
        """
        self.base_config = base_config or RingConfig()

    def _read_env_overrides(self) -> dict[str, Any]:
        """Read ring configuration overrides from environment variables.

        Values that cannot be parsed are skipped.

        Returns:
            A dictionary of configuration field names to override values.
        """
        overrides: dict[str, Any] = {}

        for field_name, env_var_name in _ENV_MAP.items():
            env_value = os.getenv(env_var_name)
            if env_value is None:
                continue

            try:
                if field_name == "max_size":
                    overrides[field_name] = parse_bytes(env_value)
                else:
                    overrides[field_name] = Granularity(env_value.strip().lower())
            except ValueError:
                logger.warning(
                    "Ignoring invalid %s=%r from environment", env_var_name, env_value
                )
                continue

        return overrides

    def resolve_effective_config(
        self, overrides: dict[str, Any] | None = None
    ) -> RingConfig:
        """Resolve the effective ring configuration.

        Args:
            overrides: Optional explicit overrides; ``None`` values are ignored.

        Returns:
            The resolved and validated ``RingConfig``.
        """
        merged = self.base_config.model_dump()
        merged.update(self._read_env_overrides())

        if overrides is not None:
            merged.update(
                {key: value for key, value in overrides.items() if value is not None}
            )

        return RingConfig.model_validate(merged)
