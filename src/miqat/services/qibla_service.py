"""Kıble yönü hesaplama."""

import math

from miqat.domain.models import KAABA, GeoCoordinate

COMPASS_POINTS = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)


def bearing_to_kaaba(latitude: float, longitude: float) -> float:
    """
    Gözlemciden Kabe'ye başlangıç büyük daire kerterizi.

    Coğrafi kutuplarda kerteriz tanımsızdır; formülün verdiği değer
    anlamlı bir yön taşımaz.

    Args:
        latitude: Enlem (derece)
        longitude: Boylam (derece)

    Returns:
        Kuzeyden saat yönünde derece, [0, 360) aralığında
    """
    observer = GeoCoordinate(latitude=latitude, longitude=longitude)

    lat1 = math.radians(observer.latitude)
    lat2 = math.radians(KAABA.latitude)
    delta_lon = math.radians(KAABA.longitude - observer.longitude)

    y = math.sin(delta_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)

    bearing = (math.degrees(math.atan2(y, x)) + 360) % 360
    # -0.0 ve yuvarlama kaynaklı 360.0 değerleri
    if bearing >= 360:
        bearing -= 360
    return bearing + 0.0


def compass_direction(degrees: float) -> str:
    """Kerteriz için 16 noktalı pusula yönü (N, NNE, ...)."""
    index = round(degrees / 22.5) % 16
    return COMPASS_POINTS[index]
