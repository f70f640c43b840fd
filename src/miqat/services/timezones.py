"""Timezone providers (zoneinfo, fixed offsets, timezonefinder)."""

import logging
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timezonefinder import TimezoneFinder

from miqat.domain.models import GeoCoordinate
from miqat.errors import ConfigurationError
from miqat.services.ports import TimezoneProviderPort

logger = logging.getLogger(__name__)

# UTC-12:00 .. UTC+14:00 dışındaki farklar hiçbir sivil saat diliminde yok
MIN_UTC_OFFSET = timedelta(hours=-12)
MAX_UTC_OFFSET = timedelta(hours=14)

_OFFSET_PATTERN = re.compile(
    r"^(?:UTC|GMT)?\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)

TimezoneLike = str | int | float | timedelta | tzinfo | TimezoneProviderPort


class TimezoneProvider(TimezoneProviderPort):
    """tzinfo tabanlı saat dilimi sağlayıcı."""

    def __init__(self, tz: tzinfo, name: str | None = None) -> None:
        """
        Initialize provider.

        Args:
            tz: Saat dilimi nesnesi (ZoneInfo ya da sabit fark)
            name: Görüntüleme adı (varsayılan: tzinfo'dan)
        """
        self._tz = tz
        self._name = name or str(tz)

    @property
    def tzinfo(self) -> tzinfo:
        """Saat dilimi nesnesi."""
        return self._tz

    @property
    def name(self) -> str:
        """Saat dilimi adı."""
        return self._name

    def utc_offset(self, target_date: date) -> timedelta:
        """Tarihin yerel öğle saatinde geçerli UTC farkı."""
        offset = datetime.combine(target_date, time(12), tzinfo=self._tz).utcoffset()
        if offset is None:
            return timedelta(0)
        return offset

    def localize(self, instant: datetime) -> datetime:
        """Saat dilimli anı bu dilime çevir."""
        if instant.tzinfo is None:
            raise ValueError(f"Saat dilimsiz an: {instant}")
        return instant.astimezone(self._tz)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r})"


def fixed_offset(offset: timedelta) -> TimezoneProvider:
    """Sabit UTC farkı için sağlayıcı."""
    if not MIN_UTC_OFFSET <= offset <= MAX_UTC_OFFSET:
        raise ConfigurationError(f"Geçersiz UTC farkı: {offset}")
    return TimezoneProvider(timezone(offset))


def named_zone(name: str) -> TimezoneProvider:
    """IANA saat dilimi için sağlayıcı."""
    try:
        return TimezoneProvider(ZoneInfo(name), name=name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Bilinmeyen saat dilimi: {name!r}") from e


def _parse_offset(value: str) -> timedelta | None:
    """'+03:00', 'UTC-5', 'GMT+0530' gibi ifadeleri çöz."""
    match = _OFFSET_PATTERN.match(value.strip())
    if match is None:
        return None
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    if minutes >= 60:
        return None
    offset = timedelta(hours=hours, minutes=minutes)
    return -offset if match.group("sign") == "-" else offset


def resolve_timezone(value: TimezoneLike) -> TimezoneProviderPort:
    """
    Saat dilimi girdisini sağlayıcıya çevir.

    Args:
        value: IANA adı, sabit fark ("+03:00", "UTC-5"), saat cinsinden sayı,
            timedelta, tzinfo ya da hazır bir sağlayıcı

    Returns:
        Saat dilimi sağlayıcı

    Raises:
        ConfigurationError: Tanınmayan saat dilimi
    """
    if isinstance(value, TimezoneProviderPort):
        return value
    if isinstance(value, tzinfo):
        return TimezoneProvider(value)
    if isinstance(value, timedelta):
        return fixed_offset(value)
    if isinstance(value, bool):
        raise ConfigurationError(f"Geçersiz saat dilimi: {value!r}")
    if isinstance(value, int | float):
        return fixed_offset(timedelta(hours=value))
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ConfigurationError("Saat dilimi boş olamaz")
        if stripped.upper() in ("UTC", "GMT", "Z"):
            return TimezoneProvider(timezone.utc, name="UTC")
        offset = _parse_offset(stripped)
        if offset is not None:
            return fixed_offset(offset)
        return named_zone(stripped)
    raise ConfigurationError(f"Geçersiz saat dilimi: {value!r}")


@lru_cache(maxsize=1)
def _timezone_finder() -> TimezoneFinder:
    return TimezoneFinder()


def timezone_for(coordinate: GeoCoordinate) -> TimezoneProvider:
    """Koordinatın bulunduğu IANA saat dilimi (bulunamazsa UTC)."""
    tz_name = _timezone_finder().timezone_at(lat=coordinate.latitude, lng=coordinate.longitude)
    if tz_name is None:
        logger.debug(f"Saat dilimi bulunamadı, UTC kullanılıyor: {coordinate}")
        tz_name = "UTC"
    return named_zone(tz_name)
