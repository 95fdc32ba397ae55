# ludoteca/scraper/page_fetch.py

from functools import partial
from typing import Callable, Dict, Optional, Sequence
from urllib.parse import quote

import httpx

from ludoteca.config import settings
from ludoteca.errors import PageFetchError
from ludoteca.utils.logging import log_info, log_warning
from ludoteca.utils.strategies import StrategyResult, first_success_async

USER_AGENT = "Ludoteca/1.0 (+board game library)"
DEFAULT_FAILURE = "Não foi possível acessar a página"

# --- Page-access strategies: page URL -> URL actually requested ---
ACCESS_STRATEGIES: Dict[str, Callable[[str], str]] = {
    "direct": lambda url: url,
    "corsproxy": lambda url: f"https://corsproxy.io/?{quote(url, safe='')}",
    "allorigins": lambda url: f"https://api.allorigins.win/raw?url={quote(url, safe='')}",
}


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        http2=settings.HTTP2,
        timeout=httpx.Timeout(settings.FETCH_TIMEOUT_SECONDS),
    )


class PageFetcher:
    """Fetches a page through the configured access strategies, first 2xx wins."""

    def __init__(
        self,
        strategies: Optional[Sequence[str]] = None,
        client_factory: Callable[[], httpx.AsyncClient] = _make_client,
    ) -> None:
        names = list(strategies if strategies is not None else settings.FETCH_STRATEGIES)
        unknown = [name for name in names if name not in ACCESS_STRATEGIES]
        if unknown:
            raise ValueError(f"Unknown page-access strategies: {', '.join(unknown)}")
        self.strategies = names
        self._client_factory = client_factory

    async def _attempt(self, client: httpx.AsyncClient, name: str, url: str) -> StrategyResult[str]:
        target = ACCESS_STRATEGIES[name](url)
        try:
            resp = await client.get(target)
        except httpx.HTTPError as e:
            log_warning(f"⚠️ [{name}] {type(e).__name__}: {e}")
            return StrategyResult.skip(str(e) or type(e).__name__, strategy=name)

        if resp.is_success:
            return StrategyResult.success(resp.text, strategy=name)

        log_warning(f"🚧 [{name}] HTTP {resp.status_code} for {url}")
        return StrategyResult.skip(strategy=name)

    async def fetch(self, url: str) -> str:
        log_info(f"➡️ Fetching page: {url}")
        async with self._client_factory() as client:
            result = await first_success_async(
                partial(self._attempt, client, name, url) for name in self.strategies
            )

        if not result.ok:
            raise PageFetchError(result.reason or DEFAULT_FAILURE)

        log_info(f"✅ Page fetched via {result.strategy} ({len(result.value)} chars)")
        return result.value
