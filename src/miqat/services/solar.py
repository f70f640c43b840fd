"""Güneş konumu hesapları (çözücüye özel).

Deklinasyon ve zaman denklemi NOAA'nın kullandığı Spencer (1971) kesik
Fourier serisinden hesaplanır. Beklenen hata: deklinasyonda ~0.05°, zaman
denkleminde ~1 dakika. Orta enlemlerde namaz vakitleri almanak değerlerine
~2 dakika içinde uyar; astronomik hassasiyet hedeflenmez.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date

# Kırılma ve güneş yarıçapı için ufuk düzeltmesi
SUNRISE_ALTITUDE = -0.833


@dataclass(frozen=True)
class SolarPosition:
    """Belirli bir andaki güneş konumu."""

    declination: float  # derece
    equation_of_time: float  # dakika


def fractional_year(target_date: date, utc_hours: float = 12.0) -> float:
    """Yılın kesirli açısı (radyan)."""
    days_in_year = 366 if calendar.isleap(target_date.year) else 365
    day_of_year = target_date.timetuple().tm_yday
    return 2 * math.pi / days_in_year * (day_of_year - 1 + (utc_hours - 12) / 24)


def solar_position(target_date: date, utc_hours: float = 12.0) -> SolarPosition:
    """Tarihin UTC saatindeki deklinasyon ve zaman denklemi."""
    gamma = fractional_year(target_date, utc_hours)

    declination = (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )
    equation_of_time = 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )
    return SolarPosition(declination=math.degrees(declination), equation_of_time=equation_of_time)


def solar_noon(target_date: date, longitude: float) -> float:
    """Güneş öğlesi, tarihin UTC gece yarısından itibaren dakika."""
    approximate_hours = 12 - longitude / 15
    eot = solar_position(target_date, approximate_hours).equation_of_time
    return 720 - 4 * longitude - eot


def hour_angle(latitude: float, declination: float, altitude: float) -> float | None:
    """
    Güneşin verilen yüksekliğe ulaştığı saat açısı.

    Args:
        latitude: Enlem (derece)
        declination: Güneş deklinasyonu (derece)
        altitude: Güneş yüksekliği (derece, ufkun altı negatif)

    Returns:
        Saat açısı derece cinsinden; güneş bu yüksekliğe hiç ulaşmıyorsa None
    """
    lat = math.radians(latitude)
    decl = math.radians(declination)
    denominator = math.cos(lat) * math.cos(decl)
    if denominator == 0:
        return None

    cos_h = (math.sin(math.radians(altitude)) - math.sin(lat) * math.sin(decl)) / denominator
    if not -1 <= cos_h <= 1:
        return None
    return math.degrees(math.acos(cos_h))


def asr_altitude(latitude: float, declination: float, shadow_factor: int) -> float | None:
    """Gölge boyu = k * cisim boyu + öğle gölgesi olduğu andaki güneş yüksekliği.

    Güneş öğlede ufkun üstüne çıkmıyorsa (kutup gecesi) öğle gölgesi
    tanımsızdır ve None döner.
    """
    zenith = abs(latitude - declination)
    if zenith >= 90:
        return None
    noon_shadow = math.tan(math.radians(zenith))
    return math.degrees(math.atan(1 / (shadow_factor + noon_shadow)))
