"""Service layer interfaces (ports)."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, tzinfo

from miqat.domain.models import IPLocationResult, PrayerSchedule


class PrayerTimeCalculatorPort(ABC):
    """Namaz vakti hesaplama arayüzü (port)."""

    @abstractmethod
    def calculate(self, target_date: date) -> PrayerSchedule:
        """Belirtilen tarih için namaz vakitlerini hesapla."""

    @abstractmethod
    def calculate_range(self, start_date: date, days: int) -> list[PrayerSchedule]:
        """Belirtilen tarihten itibaren n gün için vakitleri hesapla."""


class TimezoneProviderPort(ABC):
    """Saat dilimi arayüzü (port).

    Çözücü yalnızca sayısal UTC dakikalarıyla çalışır; takvim tarihinden
    mutlak ana dönüşüm bu arayüz üzerinden yapılır.
    """

    @property
    @abstractmethod
    def tzinfo(self) -> tzinfo:
        """Temsil edilen saat dilimi."""

    @abstractmethod
    def utc_offset(self, target_date: date) -> timedelta:
        """Tarihin yerel öğle saatinde geçerli UTC farkı."""

    @abstractmethod
    def localize(self, instant: datetime) -> datetime:
        """Saat dilimli bir anı bu dilimde göster."""


class LocationResolverPort(ABC):
    """Ağ adresinden konum çözümleme arayüzü (port)."""

    @abstractmethod
    async def resolve(self) -> IPLocationResult:
        """Konumu çözümle; hata durumunda başarısız sonuç döndür."""
