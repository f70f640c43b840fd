"""IP address based location resolver."""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from miqat.config import AppConfig, get_config
from miqat.domain.models import GeoCoordinate, IPLocationResult
from miqat.errors import InvalidCoordinate, NetworkResolutionFailure
from miqat.infrastructure.schemas import IpInfoResponse
from miqat.services.ports import LocationResolverPort

logger = logging.getLogger(__name__)


class IpInfoLocationResolver(LocationResolverPort):
    """ipinfo.io uyumlu servis ile ağ adresinden konum çözümleme.

    Her çağrı tek bir istek yapar; yeniden deneme çağıranın sorumluluğudur.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            url: Konum servisi adresi
            timeout: İstek zaman aşımı (saniye)
            client: Paylaşılan HTTP istemcisi (sahibi çağıran)
            transport: Kendi istemcimiz için özel transport (testler)
        """
        self._url = url
        self._timeout = timeout
        self._client = client
        self._transport = transport

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> "IpInfoLocationResolver":
        """Yapılandırmadan oluştur."""
        config = config or get_config()
        return cls(config.ip_lookup_url, timeout=config.ip_lookup_timeout)

    @property
    def url(self) -> str:
        """Konum servisi adresi."""
        return self._url

    async def _fetch(self) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self._url, timeout=self._timeout)

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return await client.get(self._url)

    async def resolve(self) -> IPLocationResult:
        """Konumu çözümle; hata durumunda başarısız sonuç döndür."""
        try:
            response = await self._fetch()
            response.raise_for_status()
            payload = IpInfoResponse.model_validate_json(response.content)
            coordinate = GeoCoordinate(latitude=payload.latitude, longitude=payload.longitude)
        except asyncio.CancelledError:
            logger.debug("Konum çözümleme iptal edildi.")
            raise
        except httpx.TimeoutException as e:
            return self._failure(f"Konum servisi zaman aşımına uğradı: {self._url}", e)
        except httpx.HTTPStatusError as e:
            return self._failure(f"Konum servisi hata döndü: {e.response.status_code}", e)
        except httpx.HTTPError as e:
            return self._failure(f"Konum servisine ulaşılamadı: {e}", e)
        except httpx.InvalidURL as e:
            return self._failure(f"Geçersiz konum servisi adresi: {self._url!r} ({e})", e)
        except ValidationError as e:
            return self._failure(f"Konum servisi yanıtı geçersiz: {e.error_count()} hata", e)
        except InvalidCoordinate as e:
            return self._failure(f"Konum servisi geçersiz koordinat döndürdü: {e}", e)

        logger.debug(f"Konum çözümlendi: {coordinate} ({payload.city}, {payload.country})")
        return IPLocationResult.succeeded(
            coordinate,
            city=payload.city,
            region=payload.region,
            country=payload.country,
            timezone=payload.timezone,
        )

    def _failure(self, message: str, reason: BaseException) -> IPLocationResult:
        logger.warning(message)
        return IPLocationResult.failed(NetworkResolutionFailure(message, reason=reason))


async def resolve_from_network(resolver: LocationResolverPort | None = None) -> IPLocationResult:
    """
    Ağ adresinden yaklaşık konumu çözümle.

    Args:
        resolver: Konum çözümleyici (varsayılan: yapılandırmadaki ipinfo servisi)

    Returns:
        Başarılı ya da başarısız IPLocationResult; ağ hataları fırlatılmaz
    """
    if resolver is None:
        resolver = IpInfoLocationResolver.from_config()
    return await resolver.resolve()
