"""Single-shot JSON GET with bounded timeout and no retries."""

import logging
from typing import Any

import httpx

from stormapi.ingest.errors import UpstreamError

logger = logging.getLogger(__name__)

# httpx logs full request URLs at INFO, credential query params included.
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def fetch_json(
    service: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 10.0,
    log_url: bool = True,
) -> Any:
    """GET ``url`` and decode the JSON body.

    Any failure is raised as UpstreamError. Pass ``log_url=False`` for
    credentialed requests so the query string never reaches the logs.
    """
    target = url if log_url else f"{service} endpoint"
    try:
        resp = httpx.get(
            url,
            params=params,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
        )
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error("%s returned %d for %s", service, status, target)
        raise UpstreamError(service, f"HTTP {status}", status) from e
    except httpx.TimeoutException as e:
        logger.error("%s timed out after %.1fs for %s", service, timeout, target)
        raise UpstreamError(service, "request timed out") from e
    except httpx.RequestError as e:
        logger.error(
            "%s request failed for %s: %s", service, target, type(e).__name__
        )
        raise UpstreamError(service, f"request failed ({type(e).__name__})") from e
    except ValueError as e:
        logger.error("%s returned a non-JSON body for %s", service, target)
        raise UpstreamError(service, "malformed response body") from e
