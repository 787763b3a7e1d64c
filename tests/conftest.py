"""Shared fixtures: isolated home directory, fake clocks, mocked HTTP transport."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from structlog.testing import capture_logs

from trade_directory.config import AggregatorConfig
from trade_directory.engine import RateLimiter
from trade_directory.orchestrator import TradeDirectoryService
from trade_directory.records import BusinessType, CompanyRecord, DataType, SourceName

FIXED_NOW = datetime(2024, 5, 20, 8, 30, tzinfo=timezone.utc)

DGFT_HOST = "dgft.gov.in"
PORTAL_HOST = "www.indiantradeportal.in"

DGFT_HTML = """
<html><body>
<form><table>
  <tr><td>Email:</td><td><input name="email"></td></tr>
  <tr><td>Captcha</td><td><img src="/captcha"></td></tr>
  <tr><td>Login</td></tr>
</table></form>
<table class="directory">
  <tr><th>Firm</th><th>City</th></tr>
  <tr><td>Malabar Pepper Exports</td><td>Kochi</td></tr>
  <tr><td>ABC</td><td>Pune</td></tr>
  <tr><td>Kerala Spices Company</td><td>Kochi</td></tr>
</table>
</body></html>
"""

PORTAL_HTML = """
<html><body>
<div class="supplier-item"><span class="supplier-name">Organic Spice Growers Ltd</span></div>
<div class="supplier-item"><span class="supplier-name">MALABAR PEPPER EXPORTS</span></div>
<div class="buyer-item"><span class="buyer-name">Coastal Food Importers</span></div>
</body></html>
"""


class FakeClock:
    """Monotonic clock whose sleep only advances the reading."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TRADE_DIRECTORY_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def captured_logs():
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_record() -> Callable[..., CompanyRecord]:
    def _builder(name: str = "Acme Traders", **overrides: Any) -> CompanyRecord:
        base: dict[str, Any] = {
            "company_name": name,
            "source": SourceName.DGFT,
            "data_type": DataType.SCRAPED,
            "business_type": BusinessType.EXPORTER,
            "hs_code": "0904",
        }
        base.update(overrides)
        return CompanyRecord(**base)

    return _builder


def route_by_host(pages: dict[str, Any]) -> Callable[[httpx.Request], httpx.Response]:
    """Build a transport handler answering per host.

    Values may be markup (200 response), an int status code, or an exception
    class raised with the request attached.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        page = pages.get(request.url.host, 404)
        if isinstance(page, type) and issubclass(page, Exception):
            raise page("simulated failure", request=request)
        if isinstance(page, int):
            return httpx.Response(page, request=request, text="")
        return httpx.Response(200, request=request, text=page)

    return handler


def failing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("network unreachable", request=request)


@pytest.fixture
def build_service(fake_clock: FakeClock) -> Callable[..., TradeDirectoryService]:
    def _builder(
        handler: Callable[[httpx.Request], httpx.Response],
        config: AggregatorConfig | None = None,
    ) -> TradeDirectoryService:
        config = config or AggregatorConfig()
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        limiter = RateLimiter(config.min_interval_seconds, clock=fake_clock, sleep=fake_clock.sleep)
        return TradeDirectoryService(
            config,
            client=client,
            rate_limiter=limiter,
            clock=lambda: FIXED_NOW,
        )

    return _builder


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def dgft_html() -> str:
    return DGFT_HTML


@pytest.fixture
def portal_html() -> str:
    return PORTAL_HTML


@pytest.fixture
def pages(dgft_html: str, portal_html: str) -> dict[str, Any]:
    return {DGFT_HOST: dgft_html, PORTAL_HOST: portal_html}


@pytest.fixture
def host_router() -> Callable[[dict[str, Any]], Callable[[httpx.Request], httpx.Response]]:
    return route_by_host


@pytest.fixture
def offline_handler() -> Callable[[httpx.Request], httpx.Response]:
    return failing_handler
