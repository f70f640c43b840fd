"""miqat - Namaz vakti ve kıble yönü hesaplama çekirdeği."""

from miqat.domain.models import (
    KAABA,
    CalculationMethod,
    GeoCoordinate,
    IPLocationResult,
    Madhab,
    PrayerName,
    PrayerSchedule,
)
from miqat.errors import (
    ConfigurationError,
    HighLatitudeUnresolvable,
    InvalidCoordinate,
    MiqatError,
    NetworkResolutionFailure,
)
from miqat.infrastructure.ip_locator import resolve_from_network
from miqat.services.prayer_service import compute_schedule
from miqat.services.qibla_service import bearing_to_kaaba

__version__ = "0.1.0"

__all__ = [
    "KAABA",
    "CalculationMethod",
    "ConfigurationError",
    "GeoCoordinate",
    "HighLatitudeUnresolvable",
    "IPLocationResult",
    "InvalidCoordinate",
    "Madhab",
    "MiqatError",
    "NetworkResolutionFailure",
    "PrayerName",
    "PrayerSchedule",
    "__version__",
    "bearing_to_kaaba",
    "compute_schedule",
    "resolve_from_network",
]
