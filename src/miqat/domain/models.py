"""Domain models and value objects."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo
from enum import Enum
from types import MappingProxyType
from typing import Self

from miqat.errors import (
    ConfigurationError,
    HighLatitudeUnresolvable,
    InvalidCoordinate,
    NetworkResolutionFailure,
)


class PrayerName(str, Enum):
    """Namaz vakti isimleri (gün içindeki sırasıyla)."""

    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"

    @property
    def display_name(self) -> str:
        """Görüntüleme adı."""
        names = {
            PrayerName.FAJR: "Fajr",
            PrayerName.SUNRISE: "Sunrise",
            PrayerName.DHUHR: "Dhuhr",
            PrayerName.ASR: "Asr",
            PrayerName.MAGHRIB: "Maghrib",
            PrayerName.ISHA: "Isha",
        }
        return names[self]

    @property
    def is_obligatory(self) -> bool:
        """Farz vakitlerden mi? (güneş doğuşu değil)"""
        return self is not PrayerName.SUNRISE


@dataclass(frozen=True)
class PrayerOffsets:
    """Namaz vakitlerine uygulanacak offset değerleri (dakika)."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def get_offset(self, prayer: PrayerName) -> int:
        """Belirtilen vakit için offset döndür."""
        mapping = {
            PrayerName.FAJR: self.fajr,
            PrayerName.SUNRISE: self.sunrise,
            PrayerName.DHUHR: self.dhuhr,
            PrayerName.ASR: self.asr,
            PrayerName.MAGHRIB: self.maghrib,
            PrayerName.ISHA: self.isha,
        }
        return mapping[prayer]

    def combine(self, other: "PrayerOffsets") -> "PrayerOffsets":
        """İki offset kümesini topla."""
        return PrayerOffsets(
            fajr=self.fajr + other.fajr,
            sunrise=self.sunrise + other.sunrise,
            dhuhr=self.dhuhr + other.dhuhr,
            asr=self.asr + other.asr,
            maghrib=self.maghrib + other.maghrib,
            isha=self.isha + other.isha,
        )


NO_OFFSETS = PrayerOffsets()


@dataclass(frozen=True)
class MethodParameters:
    """Bir hesaplama metodunun açı ve düzeltme parametreleri.

    Yatsı ya alacakaranlık açısıyla (isha_angle) ya da akşamdan sonra sabit
    dakikayla (isha_interval) tanımlanır; ikisinden yalnızca biri verilir.
    """

    fajr_angle: float
    isha_angle: float | None = None
    isha_interval: int | None = None
    adjustments: PrayerOffsets = NO_OFFSETS

    def __post_init__(self) -> None:
        """Parametre doğrulaması."""
        if (self.isha_angle is None) == (self.isha_interval is None):
            raise ConfigurationError(
                "Yatsı için isha_angle ya da isha_interval değerlerinden tam olarak biri gerekli"
            )
        if not 0 < self.fajr_angle < 90:
            raise ConfigurationError(f"Geçersiz imsak açısı: {self.fajr_angle}")
        if self.isha_angle is not None and not 0 < self.isha_angle < 90:
            raise ConfigurationError(f"Geçersiz yatsı açısı: {self.isha_angle}")
        if self.isha_interval is not None and self.isha_interval <= 0:
            raise ConfigurationError(f"Geçersiz yatsı aralığı: {self.isha_interval}")

    @property
    def uses_isha_interval(self) -> bool:
        """Yatsı akşamdan sonra sabit süre mi?"""
        return self.isha_interval is not None


class CalculationMethod(str, Enum):
    """Namaz vakti hesaplama metotları."""

    MUSLIM_WORLD_LEAGUE = "MuslimWorldLeague"
    EGYPTIAN = "Egyptian"
    KARACHI = "Karachi"
    UMM_AL_QURA = "UmmAlQura"
    DUBAI = "Dubai"
    MOONSIGHTING_COMMITTEE = "MoonsightingCommittee"
    NORTH_AMERICA = "NorthAmerica"
    KUWAIT = "Kuwait"
    QATAR = "Qatar"
    SINGAPORE = "Singapore"

    @property
    def parameters(self) -> MethodParameters:
        """Metodun açı parametreleri."""
        return _METHOD_PARAMETERS[self]

    @classmethod
    def parse(cls, value: "CalculationMethod | str") -> Self:
        """Enum üyesi ya da adından metodu çöz."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value.lower(), member.name.lower()):
                    return member
        raise ConfigurationError(f"Bilinmeyen hesaplama metodu: {value!r}")


# Açılar derece, düzeltmeler dakika. Öğle düzeltmesi çözücünün sabit
# güvenlik payına eklenir.
_METHOD_PARAMETERS: dict[CalculationMethod, MethodParameters] = {
    CalculationMethod.MUSLIM_WORLD_LEAGUE: MethodParameters(fajr_angle=18, isha_angle=17),
    CalculationMethod.EGYPTIAN: MethodParameters(fajr_angle=19.5, isha_angle=17.5),
    CalculationMethod.KARACHI: MethodParameters(fajr_angle=18, isha_angle=18),
    CalculationMethod.UMM_AL_QURA: MethodParameters(fajr_angle=18.5, isha_interval=90),
    CalculationMethod.DUBAI: MethodParameters(
        fajr_angle=18.2,
        isha_angle=18.2,
        adjustments=PrayerOffsets(sunrise=-3, dhuhr=1, asr=3, maghrib=3),
    ),
    CalculationMethod.MOONSIGHTING_COMMITTEE: MethodParameters(
        fajr_angle=18,
        isha_angle=18,
        adjustments=PrayerOffsets(dhuhr=3, maghrib=3),
    ),
    CalculationMethod.NORTH_AMERICA: MethodParameters(fajr_angle=15, isha_angle=15),
    CalculationMethod.KUWAIT: MethodParameters(fajr_angle=18, isha_angle=17.5),
    CalculationMethod.QATAR: MethodParameters(fajr_angle=18, isha_interval=90),
    CalculationMethod.SINGAPORE: MethodParameters(fajr_angle=20, isha_angle=18),
}

DEFAULT_CALCULATION_METHOD = CalculationMethod.MUSLIM_WORLD_LEAGUE


class Madhab(str, Enum):
    """Fıkhi mezhep (yalnızca ikindi gölge katsayısını etkiler)."""

    SHAFI = "Shafi"
    HANAFI = "Hanafi"

    @property
    def shadow_factor(self) -> int:
        """İkindi için gölge boyu katsayısı."""
        factors = {
            Madhab.SHAFI: 1,
            Madhab.HANAFI: 2,
        }
        return factors[self]

    @classmethod
    def parse(cls, value: "Madhab | str") -> Self:
        """Enum üyesi ya da adından mezhebi çöz."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value.lower(), member.name.lower()):
                    return member
        raise ConfigurationError(f"Bilinmeyen mezhep: {value!r}")


DEFAULT_MADHAB = Madhab.SHAFI


@dataclass(frozen=True)
class GeoCoordinate:
    """WGS84 koordinatı (immutable value object)."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Koordinat doğrulaması."""
        for name, limit in (("latitude", 90), ("longitude", 180)):
            label = "enlem" if name == "latitude" else "boylam"
            value = getattr(self, name)
            try:
                as_float = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidCoordinate(f"Geçersiz {label}: {value!r}") from e
            if not math.isfinite(as_float) or not -limit <= as_float <= limit:
                raise InvalidCoordinate(f"Geçersiz {label}: {value!r}")
            object.__setattr__(self, name, as_float)


# Kabe koordinatları
KAABA = GeoCoordinate(latitude=21.4225, longitude=39.8262)


@dataclass(frozen=True)
class PrayerTime:
    """Tek bir namaz vakti (saat dilimli an)."""

    name: PrayerName
    at: datetime

    @property
    def date(self) -> date:
        """Yerel takvim tarihi."""
        return self.at.date()

    @property
    def time_str(self) -> str:
        """HH:MM formatında."""
        return self.at.strftime("%H:%M")


@dataclass(frozen=True)
class PrayerSchedule:
    """Bir günün namaz vakitleri.

    Yalnızca çözülebilen vakitler ``times`` içinde bulunur. Çözümsüz bir
    vakte erişmek ``HighLatitudeUnresolvable`` fırlatır.
    """

    date: date
    coordinate: GeoCoordinate
    times: Mapping[PrayerName, datetime] = field(hash=False)
    method: CalculationMethod = DEFAULT_CALCULATION_METHOD
    madhab: Madhab = DEFAULT_MADHAB

    def __post_init__(self) -> None:
        """Saat dilimi kontrolü ve salt okunur kopya."""
        for prayer, moment in self.times.items():
            if moment.tzinfo is None or moment.utcoffset() is None:
                raise ValueError(f"{prayer.display_name} vakti saat dilimsiz: {moment}")
        ordered = {prayer: self.times[prayer] for prayer in PrayerName if prayer in self.times}
        object.__setattr__(self, "times", MappingProxyType(ordered))

    def get(self, prayer: PrayerName) -> datetime | None:
        """Vakti döndür, çözümsüzse None."""
        return self.times.get(prayer)

    def get_time(self, prayer: PrayerName) -> datetime:
        """Belirtilen vaktin anını döndür."""
        moment = self.times.get(prayer)
        if moment is None:
            raise HighLatitudeUnresolvable(prayer, self.coordinate.latitude, self.date)
        return moment

    def is_resolved(self, prayer: PrayerName) -> bool:
        """Vakit hesaplanabildi mi?"""
        return prayer in self.times

    @property
    def unresolved(self) -> tuple[PrayerName, ...]:
        """Hesaplanamayan vakitler."""
        return tuple(prayer for prayer in PrayerName if prayer not in self.times)

    @property
    def fajr(self) -> datetime:
        return self.get_time(PrayerName.FAJR)

    @property
    def sunrise(self) -> datetime:
        return self.get_time(PrayerName.SUNRISE)

    @property
    def dhuhr(self) -> datetime:
        return self.get_time(PrayerName.DHUHR)

    @property
    def asr(self) -> datetime:
        return self.get_time(PrayerName.ASR)

    @property
    def maghrib(self) -> datetime:
        return self.get_time(PrayerName.MAGHRIB)

    @property
    def isha(self) -> datetime:
        return self.get_time(PrayerName.ISHA)

    def get_prayer_time(self, prayer: PrayerName) -> PrayerTime:
        """PrayerTime nesnesi olarak döndür."""
        return PrayerTime(name=prayer, at=self.get_time(prayer))

    def all_prayer_times(self) -> list[PrayerTime]:
        """Çözülen tüm vakitleri sıralı liste olarak döndür."""
        return [PrayerTime(name=prayer, at=moment) for prayer, moment in self.times.items()]

    def in_timezone(self, tz: tzinfo) -> "PrayerSchedule":
        """Aynı anları başka bir saat diliminde göster."""
        return replace(
            self,
            times={prayer: moment.astimezone(tz) for prayer, moment in self.times.items()},
        )

    def to_dict(self) -> dict[str, str | None]:
        """Dictionary olarak döndür."""
        data: dict[str, str | None] = {
            "date": self.date.isoformat(),
            "method": self.method.value,
            "madhab": self.madhab.value,
        }
        for prayer in PrayerName:
            moment = self.times.get(prayer)
            data[prayer.value] = moment.isoformat() if moment is not None else None
        return data


@dataclass(frozen=True)
class IPLocationResult:
    """IP adresinden konum çözümleme sonucu."""

    coordinate: GeoCoordinate | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    timezone: str | None = None
    error: NetworkResolutionFailure | None = None

    def __post_init__(self) -> None:
        """Sonuç tutarlılığı."""
        if (self.coordinate is None) == (self.error is None):
            raise ValueError("Sonuç ya koordinat ya da hata taşımalı")

    @property
    def success(self) -> bool:
        """Konum çözüldü mü?"""
        return self.error is None

    def unwrap(self) -> GeoCoordinate:
        """Koordinatı döndür, başarısızsa taşınan hatayı fırlat."""
        if self.coordinate is None:
            raise self.error or NetworkResolutionFailure("Konum çözümlenemedi")
        return self.coordinate

    @classmethod
    def succeeded(
        cls,
        coordinate: GeoCoordinate,
        *,
        city: str | None = None,
        region: str | None = None,
        country: str | None = None,
        timezone: str | None = None,
    ) -> Self:
        """Başarılı sonuç oluştur."""
        return cls(
            coordinate=coordinate,
            city=city,
            region=region,
            country=country,
            timezone=timezone,
        )

    @classmethod
    def failed(cls, error: NetworkResolutionFailure) -> Self:
        """Başarısız sonuç oluştur."""
        return cls(error=error)
