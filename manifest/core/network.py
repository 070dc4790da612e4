"""Network utilities for HTTP requests and session management.

Provides a shared HTTP session with retries and a GET helper with backoff
used to retrieve the version manifest.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import get_network_config

logger = logging.getLogger(__name__)

USER_AGENT = "version-picker/0.1"

# Global session (lazy-initialized)
_SESSION: Optional[requests.Session] = None


def build_session() -> requests.Session:
    """Build a configured requests session with retries and default headers.

    Returns:
        Configured Session instance
    """
    session = requests.Session()

    # Connection errors are left to make_request so it can log and back off itself.
    retry = Retry(
        total=2,
        connect=0,
        read=1,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=frozenset(["GET", "HEAD"]),
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json, */*;q=0.5",
    })

    return session


def get_session() -> requests.Session:
    """Get the global HTTP session (lazy initialization).

    Returns:
        Configured Session instance
    """
    global _SESSION
    if _SESSION is None:
        _SESSION = build_session()
    return _SESSION


def _retry_after_seconds(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given either as seconds or an HTTP date."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        pass
    try:
        retry_dt = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    return max(0.0, (retry_dt - datetime.now(retry_dt.tzinfo)).total_seconds())


def make_request(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 15,
) -> Optional[Union[Dict[str, Any], list, str, bytes]]:
    """HTTP GET with retries and exponential backoff.

    Args:
        url: URL to request
        params: Query parameters
        headers: Additional headers
        timeout: Request timeout in seconds

    Returns:
        - dict/list for JSON responses
        - str for text responses
        - bytes for other/binary content
        - None on error
    """
    session = get_session()
    net = get_network_config()

    max_attempts = int(net.get("max_attempts", 3) or 3)
    base_backoff = float(net.get("base_backoff_s", 1.0) or 1.0)
    backoff_mult = float(net.get("backoff_multiplier", 1.5) or 1.5)
    max_backoff = float(net.get("max_backoff_s", 30.0) or 30.0)
    verify = bool(net.get("verify_ssl", True))

    # Merge headers: session defaults < configured headers < per-call headers
    req_headers: Dict[str, str] = {}
    req_headers.update({str(k): str(v) for k, v in (net.get("headers") or {}).items() if v is not None})
    if headers:
        req_headers.update(headers)

    def backoff(attempt: int) -> float:
        return min(base_backoff * (backoff_mult ** (attempt - 1)), max_backoff)

    for attempt in range(1, max_attempts + 1):
        try:
            resp = session.get(
                url,
                params=params,
                headers=req_headers or None,
                timeout=timeout,
                verify=verify,
            )

            if resp.status_code == 429:
                sleep_s = _retry_after_seconds(resp.headers.get("Retry-After"))
                sleep_s = min(sleep_s if sleep_s is not None else backoff(attempt), max_backoff)
                logger.warning(
                    "429 Too Many Requests for %s; sleeping %.1fs (attempt %d/%d)",
                    url, sleep_s, attempt, max_attempts
                )
                time.sleep(sleep_s)
                continue

            if resp.status_code in (500, 502, 503, 504):
                sleep_s = backoff(attempt)
                logger.warning(
                    "%s for %s; sleeping %.1fs (attempt %d/%d)",
                    resp.status_code, url, sleep_s, attempt, max_attempts
                )
                time.sleep(sleep_s)
                continue

            if 400 <= resp.status_code < 500:
                logger.warning("Non-retryable HTTP %s for %s; not retrying", resp.status_code, url)
                return None

            resp.raise_for_status()

            content_type = resp.headers.get("Content-Type", "").lower()
            if "json" in content_type:
                try:
                    return resp.json()
                except ValueError as e:
                    logger.error("JSON decode error for %s: %s", url, e)
                    return None

            if "text/" in content_type:
                return resp.text

            return resp.content

        except requests.exceptions.Timeout:
            if attempt < max_attempts:
                sleep_s = backoff(attempt)
                logger.warning(
                    "Timeout for %s; sleeping %.1fs (attempt %d/%d)",
                    url, sleep_s, attempt, max_attempts
                )
                time.sleep(sleep_s)
                continue
            logger.error("Request timed out: %s", url)
            return None

        except requests.exceptions.RequestException as e:
            if attempt < max_attempts:
                sleep_s = backoff(attempt)
                logger.warning(
                    "Request error for %s: %s; sleeping %.1fs (attempt %d/%d)",
                    url, e, sleep_s, attempt, max_attempts
                )
                time.sleep(sleep_s)
                continue
            logger.error("Request failed for %s: %s", url, e)
            return None

    logger.error("Giving up after %d attempts for %s", max_attempts, url)
    return None
