"""
Client configuration for the AMeDAS endpoints.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://www.jma.go.jp/bosai/amedas"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by every request of an ``AmedasClient``."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = "amedasmap-client/0.1.0"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, timeout: Optional[float] = None) -> "ClientConfig":
        """
        Build a config from ``AMEDAS_BASE_URL`` and ``AMEDAS_TIMEOUT``.

        An explicit ``timeout`` argument wins over the environment.
        """
        base_url = os.environ.get("AMEDAS_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        if timeout is None:
            timeout = float(os.environ.get("AMEDAS_TIMEOUT", DEFAULT_TIMEOUT))
        return cls(base_url=base_url, timeout=timeout)
