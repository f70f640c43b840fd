"""Configuration management."""

import logging
import os
from dataclasses import dataclass
from typing import Self

from miqat.domain.models import (
    DEFAULT_CALCULATION_METHOD,
    DEFAULT_MADHAB,
    CalculationMethod,
    Madhab,
)
from miqat.errors import ConfigurationError

DEFAULT_IP_LOOKUP_URL = "https://ipinfo.io/json"
DEFAULT_IP_LOOKUP_TIMEOUT = 15.0


@dataclass
class AppConfig:
    """Application configuration."""

    log_level: str = "INFO"

    # IP tabanlı konum servisi
    ip_lookup_url: str = DEFAULT_IP_LOOKUP_URL
    ip_lookup_timeout: float = DEFAULT_IP_LOOKUP_TIMEOUT

    # Hesaplama varsayılanları
    calculation_method: CalculationMethod = DEFAULT_CALCULATION_METHOD
    madhab: Madhab = DEFAULT_MADHAB

    def __post_init__(self) -> None:
        """Yapılandırma doğrulaması."""
        if self.log_level.upper() not in logging.getLevelNamesMapping():
            raise ConfigurationError(f"Geçersiz log seviyesi: {self.log_level}")
        if self.ip_lookup_timeout <= 0:
            raise ConfigurationError(f"Geçersiz zaman aşımı: {self.ip_lookup_timeout}")

    @classmethod
    def from_env(cls) -> Self:
        """Load configuration from environment variables."""
        timeout_raw = os.getenv("MIQAT_IP_LOOKUP_TIMEOUT", str(DEFAULT_IP_LOOKUP_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigurationError(f"Geçersiz zaman aşımı: {timeout_raw!r}") from e

        return cls(
            log_level=os.getenv("MIQAT_LOG_LEVEL", "INFO"),
            ip_lookup_url=os.getenv("MIQAT_IP_LOOKUP_URL", DEFAULT_IP_LOOKUP_URL),
            ip_lookup_timeout=timeout,
            calculation_method=CalculationMethod.parse(
                os.getenv("MIQAT_CALCULATION_METHOD", DEFAULT_CALCULATION_METHOD.value)
            ),
            madhab=Madhab.parse(os.getenv("MIQAT_MADHAB", DEFAULT_MADHAB.value)),
        )


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get application configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Önbellekteki yapılandırmayı temizle (ortam değişkenleri değişince)."""
    global _config
    _config = None


def setup_logging(level: str = "INFO") -> None:
    """Setup application logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
