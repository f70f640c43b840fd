"""Domain layer - Business entities and value objects."""

from miqat.domain.models import (
    DEFAULT_CALCULATION_METHOD,
    DEFAULT_MADHAB,
    KAABA,
    CalculationMethod,
    GeoCoordinate,
    IPLocationResult,
    Madhab,
    MethodParameters,
    PrayerName,
    PrayerOffsets,
    PrayerSchedule,
    PrayerTime,
)

__all__ = [
    "DEFAULT_CALCULATION_METHOD",
    "DEFAULT_MADHAB",
    "KAABA",
    "CalculationMethod",
    "GeoCoordinate",
    "IPLocationResult",
    "Madhab",
    "MethodParameters",
    "PrayerName",
    "PrayerOffsets",
    "PrayerSchedule",
    "PrayerTime",
]
