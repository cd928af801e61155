# axle_client/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
import os

from axle_client.constants import (
    DEFAULT_AXLE_URL, DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT, DEFAULT_TRANSPORT,
)
from axle_client.logger import resolve_level


@dataclass(frozen=True)
class AxleConfig:
    """
    Connection settings for one management server.

    Environment:
      AXLE_URL        server address, e.g. http://localhost:28902/
      AXLE_TIMEOUT    transport connect/read timeout in seconds
      AXLE_TRANSPORT  transport mode ("http")
      AXLE_LOG_LEVEL  default level for the axle_client loggers; unknown names
                      fall back to INFO
    """
    base_url: str = DEFAULT_AXLE_URL
    timeout: float = DEFAULT_TIMEOUT
    transport: str = DEFAULT_TRANSPORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, **overrides) -> "AxleConfig":
        config = cls(
            base_url=os.getenv("AXLE_URL", DEFAULT_AXLE_URL),
            timeout=float(os.getenv("AXLE_TIMEOUT", DEFAULT_TIMEOUT)),
            transport=os.getenv("AXLE_TRANSPORT", DEFAULT_TRANSPORT).lower(),
            log_level=resolve_level(os.getenv("AXLE_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )
        return config.override(**overrides)

    def override(self, **overrides) -> "AxleConfig":
        """Copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return replace(self, **values)
