"""Shared HTTP fetching with browser-like headers."""

from typing import Optional

import httpx

from ..errors import FetchError

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

DEFAULT_TIMEOUT = 30.0


async def fetch_page(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Fetch a page body.

    Raises:
        FetchError: on timeout, transport failure, a malformed URL or a non-2xx status
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
            transport=transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
    except httpx.TimeoutException:
        raise FetchError(url, "Request timed out")
    except httpx.HTTPStatusError as e:
        raise FetchError(url, f"{e.response.status_code} {e.response.reason_phrase}")
    except httpx.HTTPError as e:
        raise FetchError(url, str(e) or e.__class__.__name__)
    except httpx.InvalidURL as e:
        raise FetchError(url, f"Invalid URL: {e}")
