"""Retrieve the version manifest and build a Catalog from it."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .catalog import Catalog
from .core.config import get_manifest_config
from .core.network import make_request
from .errors import ManifestUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 15.0


def _timeout_seconds(value: Any) -> float:
    """Coerce a configured timeout to a positive number of seconds."""
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        timeout = 0.0
    if not timeout > 0:
        logger.warning("Invalid manifest timeout %r; using %.0fs", value, DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S
    return timeout


def fetch_document(url: Optional[str] = None, timeout: Optional[float] = None) -> Dict[str, Any]:
    """GET the manifest document and decode it.

    Args:
        url: Manifest endpoint; defaults to ``manifest.url`` from the config
        timeout: Request timeout in seconds; defaults to ``manifest.timeout_s``

    Returns:
        The decoded JSON object

    Raises:
        ManifestUnavailable: If the request fails or the body is not a JSON object
    """
    man = get_manifest_config()
    url = url or str(man["url"])
    timeout = _timeout_seconds(timeout if timeout is not None else man["timeout_s"])

    logger.info("Fetching version manifest from %s", url)
    body = make_request(url, timeout=timeout)
    if body is None:
        raise ManifestUnavailable(url, "request failed")

    # Some mirrors serve the manifest as text/plain or octet-stream
    if isinstance(body, (bytes, str)):
        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            body = json.loads(body)
        except UnicodeDecodeError as e:
            raise ManifestUnavailable(url, f"response is not valid UTF-8 ({e})") from e
        except ValueError as e:
            raise ManifestUnavailable(url, f"response is not valid JSON ({e})") from e

    if not isinstance(body, dict):
        raise ManifestUnavailable(url, f"expected a JSON object, got {type(body).__name__}")
    return body


def load_catalog(url: Optional[str] = None, timeout: Optional[float] = None) -> Catalog:
    """Fetch the manifest and classify it."""
    return Catalog.from_document(fetch_document(url, timeout))
