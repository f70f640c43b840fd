"""Prayer time calculation service."""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, time, timedelta

from miqat.config import AppConfig, get_config
from miqat.domain.models import (
    DEFAULT_CALCULATION_METHOD,
    DEFAULT_MADHAB,
    NO_OFFSETS,
    CalculationMethod,
    GeoCoordinate,
    Madhab,
    PrayerName,
    PrayerOffsets,
    PrayerSchedule,
    PrayerTime,
)
from miqat.errors import HighLatitudeUnresolvable
from miqat.services.timezones import TimezoneLike, resolve_timezone, timezone_for
from miqat.services.ports import PrayerTimeCalculatorPort, TimezoneProviderPort
from miqat.services.solar import (
    SUNRISE_ALTITUDE,
    asr_altitude,
    hour_angle,
    solar_noon,
    solar_position,
)

logger = logging.getLogger(__name__)

# Öğlenin gerçek güneş öğlesinden önce çıkmaması için güvenlik payı
DHUHR_MARGIN_MINUTES = 2

# Deklinasyonun olay anına göre yeniden hesaplandığı tur sayısı
_REFINEMENT_PASSES = 2


def _solve_event(
    target_date: date,
    noon: float,
    latitude: float,
    altitude_for: Callable[[float], float | None],
    direction: int,
) -> float | None:
    """Güneşin belirli yüksekliğe ulaştığı an (UTC dakika); çözüm yoksa None."""
    minutes = noon
    for _ in range(_REFINEMENT_PASSES):
        declination = solar_position(target_date, minutes / 60).declination
        altitude = altitude_for(declination)
        if altitude is None:
            return None
        angle = hour_angle(latitude, declination, altitude)
        if angle is None:
            return None
        minutes = noon + direction * 4 * angle
    return minutes


def solve_day(
    coordinate: GeoCoordinate,
    solar_date: date,
    method: CalculationMethod,
    madhab: Madhab,
) -> dict[PrayerName, float | None]:
    """
    Bir güneş günü için vakitleri UTC dakikası olarak hesapla.

    Dakikalar solar_date'in UTC gece yarısından itibarendir. Saat açısı
    denkleminin çözümü olmayan vakitler None döner.
    """
    params = method.parameters
    latitude = coordinate.latitude
    noon = solar_noon(solar_date, coordinate.longitude)

    def fixed(altitude: float) -> Callable[[float], float | None]:
        return lambda _declination: altitude

    sunset = _solve_event(solar_date, noon, latitude, fixed(SUNRISE_ALTITUDE), +1)

    if params.isha_interval is not None:
        isha = sunset + params.isha_interval if sunset is not None else None
    else:
        isha = _solve_event(solar_date, noon, latitude, fixed(-params.isha_angle), +1)

    return {
        PrayerName.FAJR: _solve_event(solar_date, noon, latitude, fixed(-params.fajr_angle), -1),
        PrayerName.SUNRISE: _solve_event(solar_date, noon, latitude, fixed(SUNRISE_ALTITUDE), -1),
        PrayerName.DHUHR: noon + DHUHR_MARGIN_MINUTES,
        PrayerName.ASR: _solve_event(
            solar_date,
            noon,
            latitude,
            lambda declination: asr_altitude(latitude, declination, madhab.shadow_factor),
            +1,
        ),
        PrayerName.MAGHRIB: sunset,
        PrayerName.ISHA: isha,
    }


def _solar_date_for(target_date: date, longitude: float, provider: TimezoneProviderPort) -> date:
    """Öğlesi, takvim gününün yerel öğlesine en yakın düşen UTC günü."""
    local_noon = datetime.combine(target_date, time(12), tzinfo=UTC) - provider.utc_offset(
        target_date
    )
    mean_noon = datetime.combine(target_date, time(0), tzinfo=UTC) + timedelta(
        minutes=720 - 4 * longitude
    )
    shift = round((local_noon - mean_noon) / timedelta(days=1))
    return target_date + timedelta(days=shift)


def _round_to_minute(instant: datetime) -> datetime:
    """En yakın dakikaya yuvarla."""
    rounded = instant + timedelta(seconds=30)
    return rounded.replace(second=0, microsecond=0)


def compute_schedule(
    latitude: float,
    longitude: float,
    timezone: TimezoneLike,
    target_date: date,
    method: CalculationMethod | str = DEFAULT_CALCULATION_METHOD,
    madhab: Madhab | str = DEFAULT_MADHAB,
    *,
    offsets: PrayerOffsets | None = None,
) -> PrayerSchedule:
    """
    Bir takvim günü için namaz vakitlerini hesapla.

    Args:
        latitude: Enlem (derece)
        longitude: Boylam (derece)
        timezone: IANA adı, sabit fark, tzinfo ya da TimezoneProviderPort
        target_date: Takvim tarihi
        method: Hesaplama metodu
        madhab: İkindi için mezhep
        offsets: Metot düzeltmelerine eklenecek temkin süreleri

    Returns:
        Çözülebilen vakitleri içeren PrayerSchedule

    Raises:
        InvalidCoordinate: Koordinat geçersiz
        ConfigurationError: Metot, mezhep ya da saat dilimi tanınmıyor
    """
    coordinate = GeoCoordinate(latitude=latitude, longitude=longitude)
    method = CalculationMethod.parse(method)
    madhab = Madhab.parse(madhab)
    provider = resolve_timezone(timezone)
    adjustments = method.parameters.adjustments.combine(offsets or NO_OFFSETS)

    solar_date = _solar_date_for(target_date, coordinate.longitude, provider)
    utc_midnight = datetime.combine(solar_date, time(0), tzinfo=UTC)

    times: dict[PrayerName, datetime] = {}
    for prayer, minutes in solve_day(coordinate, solar_date, method, madhab).items():
        if minutes is None:
            logger.debug(
                f"{prayer.display_name} çözümsüz: {coordinate.latitude:.4f} enlem, {target_date}"
            )
            continue
        instant = utc_midnight + timedelta(minutes=minutes + adjustments.get_offset(prayer))
        times[prayer] = provider.localize(_round_to_minute(instant))

    return PrayerSchedule(
        date=target_date,
        coordinate=coordinate,
        times=times,
        method=method,
        madhab=madhab,
    )


class PrayerService(PrayerTimeCalculatorPort):
    """Sabit bir konum için namaz vakti servisi."""

    def __init__(
        self,
        coordinate: GeoCoordinate,
        *,
        timezone: TimezoneLike | None = None,
        method: CalculationMethod | str = DEFAULT_CALCULATION_METHOD,
        madhab: Madhab | str = DEFAULT_MADHAB,
        offsets: PrayerOffsets | None = None,
    ) -> None:
        """
        Initialize prayer service.

        Args:
            coordinate: Konum
            timezone: Saat dilimi (varsayılan: koordinattan bulunur)
            method: Hesaplama metodu
            madhab: İkindi için mezhep
            offsets: Temkin süreleri
        """
        self._coordinate = coordinate
        self._method = CalculationMethod.parse(method)
        self._madhab = Madhab.parse(madhab)
        self._offsets = offsets or NO_OFFSETS

        if timezone is None:
            self._timezone = timezone_for(coordinate)
        else:
            self._timezone = resolve_timezone(timezone)

    @classmethod
    def from_config(
        cls,
        coordinate: GeoCoordinate,
        config: AppConfig | None = None,
        *,
        timezone: TimezoneLike | None = None,
    ) -> "PrayerService":
        """Metot ve mezhebi yapılandırmadan al."""
        config = config or get_config()
        return cls(
            coordinate,
            timezone=timezone,
            method=config.calculation_method,
            madhab=config.madhab,
        )

    @property
    def coordinate(self) -> GeoCoordinate:
        """Konum bilgisi."""
        return self._coordinate

    @property
    def method(self) -> CalculationMethod:
        """Hesaplama metodu."""
        return self._method

    @property
    def madhab(self) -> Madhab:
        """İkindi için mezhep."""
        return self._madhab

    @property
    def offsets(self) -> PrayerOffsets:
        """Temkin süreleri."""
        return self._offsets

    @property
    def timezone(self) -> TimezoneProviderPort:
        """Saat dilimi sağlayıcı."""
        return self._timezone

    def calculate(self, target_date: date) -> PrayerSchedule:
        """Belirtilen tarih için namaz vakitlerini hesapla."""
        return compute_schedule(
            self._coordinate.latitude,
            self._coordinate.longitude,
            self._timezone,
            target_date,
            self._method,
            self._madhab,
            offsets=self._offsets,
        )

    def calculate_range(self, start_date: date, days: int) -> list[PrayerSchedule]:
        """Belirtilen tarihten itibaren n gün için vakitleri hesapla."""
        return [self.calculate(start_date + timedelta(days=i)) for i in range(days)]

    def _now(self, now: datetime | None) -> datetime:
        if now is None:
            return datetime.now(self._timezone.tzinfo)
        if now.tzinfo is None:
            raise ValueError(f"Saat dilimsiz an: {now}")
        return self._timezone.localize(now)

    def get_current_prayer(self, now: datetime | None = None) -> PrayerName:
        """Şu anki namaz vaktini döndür."""
        now = self._now(now)
        today = self.calculate(now.date())

        # Sondan başa kontrol et
        for prayer in reversed(PrayerName):
            if not prayer.is_obligatory:
                continue
            moment = today.get(prayer)
            if moment is not None and now >= moment:
                return prayer

        # İmsaktan önce, önceki günün yatsısı
        return PrayerName.ISHA

    def get_next_prayer(self, now: datetime | None = None) -> PrayerTime:
        """Sonraki namaz vaktini döndür."""
        now = self._now(now)

        # Öğle her gün çözülebildiği için ertesi gün mutlaka bir vakit var
        for day_offset in (0, 1):
            schedule = self.calculate(now.date() + timedelta(days=day_offset))
            for prayer_time in schedule.all_prayer_times():
                if prayer_time.name.is_obligatory and now < prayer_time.at:
                    return prayer_time

        raise HighLatitudeUnresolvable(
            PrayerName.DHUHR, self._coordinate.latitude, now.date() + timedelta(days=1)
        )

    def get_time_until_next_prayer(self, now: datetime | None = None) -> timedelta:
        """Sonraki namaz vaktine kalan süre."""
        now = self._now(now)
        return self.get_next_prayer(now).at - now
