"""Service layer - Business logic."""

from miqat.services.ports import (
    LocationResolverPort,
    PrayerTimeCalculatorPort,
    TimezoneProviderPort,
)
from miqat.services.prayer_service import PrayerService, compute_schedule
from miqat.services.qibla_service import bearing_to_kaaba, compass_direction
from miqat.services.timezones import TimezoneProvider, resolve_timezone, timezone_for

__all__ = [
    "LocationResolverPort",
    "PrayerService",
    "PrayerTimeCalculatorPort",
    "TimezoneProvider",
    "TimezoneProviderPort",
    "bearing_to_kaaba",
    "compass_direction",
    "compute_schedule",
    "resolve_timezone",
    "timezone_for",
]
