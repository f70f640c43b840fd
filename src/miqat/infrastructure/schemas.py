"""Pydantic schemas for the IP geolocation response."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IpInfoResponse(BaseModel):
    """ipinfo.io /json yanıtı (yalnızca kullanılan alanlar)."""

    model_config = ConfigDict(extra="ignore")

    loc: Annotated[tuple[float, float], Field(description="'enlem,boylam' biçiminde konum")]
    ip: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    timezone: str | None = None

    @field_validator("loc", mode="before")
    @classmethod
    def split_loc(cls, value: object) -> object:
        """'41.0082,28.9784' metnini (enlem, boylam) ikilisine çevir."""
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",")]
            if len(parts) != 2 or not all(parts):
                raise ValueError(f"Geçersiz loc değeri: {value!r}")
            return tuple(parts)
        return value

    @field_validator("city", "region", "country", "timezone", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        """Boş metinleri None yap."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def latitude(self) -> float:
        return self.loc[0]

    @property
    def longitude(self) -> float:
        return self.loc[1]
