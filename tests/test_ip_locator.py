"""Tests for the IP based location resolver."""

import asyncio
import json
import logging

import httpx
import pytest
from pydantic import ValidationError

from miqat.config import AppConfig
from miqat.domain.models import GeoCoordinate, IPLocationResult
from miqat.errors import InvalidCoordinate, NetworkResolutionFailure
from miqat.infrastructure.ip_locator import IpInfoLocationResolver, resolve_from_network
from miqat.infrastructure.schemas import IpInfoResponse
from miqat.services.ports import LocationResolverPort

LOOKUP_URL = "https://ipinfo.test/json"

ISTANBUL_PAYLOAD = {
    "ip": "203.0.113.7",
    "city": "Istanbul",
    "region": "Istanbul",
    "country": "TR",
    "loc": "41.0082,28.9784",
    "org": "AS0000 Example",
    "postal": "34000",
    "timezone": "Europe/Istanbul",
}


def json_handler(payload: object, status_code: int = 200):
    """Sabit JSON yanıtı döndüren handler."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


class ClosingTransport(httpx.MockTransport):
    """Kapatıldığını kaydeden sahte transport."""

    closed = False

    async def aclose(self) -> None:
        self.closed = True


def make_resolver(handler) -> IpInfoLocationResolver:
    return IpInfoLocationResolver(
        LOOKUP_URL,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestIpInfoResponse:
    """Response schema tests."""

    def test_parse(self) -> None:
        """Test parsing a full response."""
        payload = IpInfoResponse.model_validate_json(json.dumps(ISTANBUL_PAYLOAD))
        assert payload.latitude == 41.0082
        assert payload.longitude == 28.9784
        assert payload.country == "TR"

    def test_blank_fields_become_none(self) -> None:
        """Test blank metadata is normalized."""
        payload = IpInfoResponse.model_validate({"loc": "1.5, 2.5", "city": " "})
        assert payload.loc == (1.5, 2.5)
        assert payload.city is None

    @pytest.mark.parametrize("loc", ["", "41.0", "41.0,", "a,b", "1,2,3"])
    def test_invalid_loc(self, loc: str) -> None:
        """Test malformed loc values."""
        with pytest.raises(ValidationError):
            IpInfoResponse.model_validate({"loc": loc})

    def test_missing_loc(self) -> None:
        """Test loc is required."""
        with pytest.raises(ValidationError):
            IpInfoResponse.model_validate({"city": "Istanbul"})


class TestIpInfoLocationResolver:
    """IpInfoLocationResolver tests."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        """Test a successful lookup."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=ISTANBUL_PAYLOAD)

        result = await make_resolver(handler).resolve()

        assert result.success is True
        assert result.coordinate == GeoCoordinate(latitude=41.0082, longitude=28.9784)
        assert result.city == "Istanbul"
        assert result.country == "TR"
        assert result.timezone == "Europe/Istanbul"
        assert result.error is None
        assert len(requests) == 1
        assert str(requests[0].url) == LOOKUP_URL

    @pytest.mark.asyncio
    async def test_connection_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test connection errors become a failed result."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("bağlantı reddedildi", request=request)

        with caplog.at_level(logging.WARNING, logger="miqat.infrastructure.ip_locator"):
            result = await make_resolver(handler).resolve()

        assert result.success is False
        assert result.coordinate is None
        assert isinstance(result.error, NetworkResolutionFailure)
        assert isinstance(result.error.reason, httpx.ConnectError)
        assert "Konum servisine ulaşılamadı" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test timeouts become a failed result."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("yavaş", request=request)

        result = await make_resolver(handler).resolve()

        assert result.success is False
        assert isinstance(result.error.reason, httpx.TimeoutException)
        assert "zaman aşımı" in str(result.error)

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        """Test non-2xx responses become a failed result."""
        result = await make_resolver(json_handler({"error": "rate limited"}, 429)).resolve()

        assert result.success is False
        assert isinstance(result.error.reason, httpx.HTTPStatusError)
        assert "429" in str(result.error)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"ip": "203.0.113.7"},
            {"loc": "not-a-location"},
            {"loc": "north,east"},
            {"loc": None},
        ],
    )
    async def test_malformed_payload(self, payload: dict) -> None:
        """Test responses without a usable location."""
        result = await make_resolver(json_handler(payload)).resolve()

        assert result.success is False
        assert isinstance(result.error.reason, ValidationError)

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        """Test a non-JSON body is a failed result."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>captive portal</html>")

        result = await make_resolver(handler).resolve()

        assert result.success is False
        assert isinstance(result.error.reason, ValidationError)

    @pytest.mark.asyncio
    async def test_out_of_range_coordinate(self) -> None:
        """Test impossible coordinates are a failed result."""
        result = await make_resolver(json_handler({"loc": "123.0,45.0"})).resolve()

        assert result.success is False
        assert isinstance(result.error.reason, InvalidCoordinate)

    @pytest.mark.asyncio
    async def test_unwrap_failure(self) -> None:
        """Test unwrap raises the carried error."""
        result = await make_resolver(json_handler({}, 503)).resolve()

        with pytest.raises(NetworkResolutionFailure):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_shared_client_not_closed(self) -> None:
        """Test an injected client stays open."""
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(json_handler(ISTANBUL_PAYLOAD))
        ) as client:
            resolver = IpInfoLocationResolver(LOOKUP_URL, timeout=1.0, client=client)
            first = await resolver.resolve()
            second = await resolver.resolve()

            assert first == second
            assert first.success is True
            assert client.is_closed is False

    @pytest.mark.asyncio
    async def test_cancellation(self) -> None:
        """Test cancelling the lookup cancels the task."""
        started = asyncio.Event()
        never = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            started.set()
            await never.wait()
            return httpx.Response(200, json=ISTANBUL_PAYLOAD)

        transport = ClosingTransport(handler)
        resolver = IpInfoLocationResolver(LOOKUP_URL, timeout=1.0, transport=transport)
        task = asyncio.create_task(resolver.resolve())
        await asyncio.wait_for(started.wait(), timeout=1.0)
        assert transport.closed is False

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled() is True
        # Kendi açtığı istemci kapanmış olmalı
        assert transport.closed is True

    @pytest.mark.asyncio
    async def test_owned_client_closed_after_success(self) -> None:
        """Test the resolver closes the client it opened."""
        transport = ClosingTransport(json_handler(ISTANBUL_PAYLOAD))
        resolver = IpInfoLocationResolver(LOOKUP_URL, timeout=1.0, transport=transport)

        result = await resolver.resolve()

        assert result.success is True
        assert transport.closed is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["http://[::1", "http://ipinfo.test:99999/json"])
    async def test_invalid_url(self, url: str) -> None:
        """Test a malformed endpoint address is a failed result."""
        result = await IpInfoLocationResolver(url, timeout=1.0).resolve()

        assert result.success is False
        assert isinstance(result.error, NetworkResolutionFailure)
        assert isinstance(result.error.reason, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_invalid_url_from_network(self) -> None:
        """Test resolve_from_network does not raise for a malformed address."""
        resolver = IpInfoLocationResolver("http://[::1", timeout=1.0)

        result = await resolve_from_network(resolver)

        assert result.success is False
        with pytest.raises(NetworkResolutionFailure, match="Geçersiz konum servisi adresi"):
            result.unwrap()

    def test_from_config(self) -> None:
        """Test construction from configuration."""
        config = AppConfig(ip_lookup_url="http://localhost:9000/json", ip_lookup_timeout=3.0)
        resolver = IpInfoLocationResolver.from_config(config)
        assert resolver.url == "http://localhost:9000/json"


class StubResolver(LocationResolverPort):
    """Sabit sonuç döndüren çözümleyici."""

    def __init__(self, result: IPLocationResult) -> None:
        self.result = result
        self.calls = 0

    async def resolve(self) -> IPLocationResult:
        self.calls += 1
        return self.result


class TestResolveFromNetwork:
    """resolve_from_network tests."""

    @pytest.mark.asyncio
    async def test_uses_given_resolver(self) -> None:
        """Test the given resolver is used."""
        expected = IPLocationResult.succeeded(GeoCoordinate(latitude=1.0, longitude=2.0))
        resolver = StubResolver(expected)

        assert await resolve_from_network(resolver) is expected
        assert resolver.calls == 1

    @pytest.mark.asyncio
    async def test_default_resolver_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default resolver reads configuration."""
        seen: list[str] = []

        async def fake_resolve(self: IpInfoLocationResolver) -> IPLocationResult:
            seen.append(self.url)
            return IPLocationResult.failed(NetworkResolutionFailure("çevrimdışı"))

        monkeypatch.setattr(
            "miqat.infrastructure.ip_locator.get_config",
            lambda: AppConfig(ip_lookup_url="http://localhost:9000/json"),
        )
        monkeypatch.setattr(IpInfoLocationResolver, "resolve", fake_resolve)

        result = await resolve_from_network()

        assert result.success is False
        assert seen == ["http://localhost:9000/json"]
