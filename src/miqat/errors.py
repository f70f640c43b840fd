"""Error taxonomy for the computation core."""

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from miqat.domain.models import PrayerName


class MiqatError(Exception):
    """Base class for all miqat errors."""


class InvalidCoordinate(MiqatError, ValueError):
    """Enlem/boylam aralık dışında ya da sonlu değil."""


class ConfigurationError(MiqatError, ValueError):
    """Bilinmeyen hesaplama metodu, mezhep ya da saat dilimi."""


class HighLatitudeUnresolvable(MiqatError):
    """Saat açısı denkleminin bu vakit için gerçek çözümü yok.

    Kutup yazı/kışı yakınlarında güneş istenen yüksekliğe hiç ulaşmaz;
    değer sessizce kırpılmaz, vakit çözümsüz olarak işaretlenir.
    """

    def __init__(self, prayer: "PrayerName", latitude: float, target_date: date) -> None:
        self.prayer = prayer
        self.latitude = latitude
        self.date = target_date
        super().__init__(
            f"{prayer.display_name} vakti {target_date.isoformat()} tarihinde "
            f"{latitude:.4f} enleminde hesaplanamıyor"
        )


class NetworkResolutionFailure(MiqatError):
    """IP adresinden konum çözümlenemedi."""

    def __init__(self, message: str, reason: BaseException | None = None) -> None:
        self.reason = reason
        super().__init__(message)
