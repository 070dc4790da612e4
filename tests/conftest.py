"""Pytest configuration and shared fixtures for version picker tests."""
from __future__ import annotations

import json
import os
import shutil
import tempfile
from typing import Any, Dict, Generator
from unittest.mock import MagicMock, patch

import pytest


# ============================================================================
# Path and Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test files."""
    dirpath = tempfile.mkdtemp(prefix="picker_test_")
    yield dirpath
    shutil.rmtree(dirpath, ignore_errors=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Return a sample configuration dictionary."""
    return {
        "general": {
            "interactive_mode": False,
            "log_level": "DEBUG"
        },
        "manifest": {
            "url": "https://example.com/version_manifest_v2.json",
            "timeout_s": 5
        },
        "network": {
            "max_attempts": 2,
            "base_backoff_s": 0.5,
            "headers": {"X-Test": "1"}
        }
    }


@pytest.fixture
def config_file(temp_dir: str, sample_config: Dict[str, Any]) -> str:
    """Create a temporary config file."""
    config_path = os.path.join(temp_dir, "config.json")
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f)
    return config_path


@pytest.fixture
def mock_config(sample_config: Dict[str, Any]):
    """Mock the config module to return sample config."""
    with patch("manifest.core.config._CONFIG_CACHE", sample_config):
        with patch("manifest.core.config.get_config", return_value=sample_config):
            yield sample_config


@pytest.fixture(autouse=True)
def reset_config_cache(temp_dir: str):
    """Reset config cache and point the config path away from the working tree."""
    import manifest.core.config as config_module
    original_cache = config_module._CONFIG_CACHE
    config_module._CONFIG_CACHE = None
    missing = os.path.join(temp_dir, "no_config.json")
    with patch.dict(os.environ, {config_module.CONFIG_ENV_VAR: missing}):
        yield
    config_module._CONFIG_CACHE = original_cache


@pytest.fixture(autouse=True)
def reset_session():
    """Drop the shared HTTP session between tests."""
    from manifest.core import network
    network._SESSION = None
    yield
    network._SESSION = None


# ============================================================================
# Manifest Fixtures
# ============================================================================

def make_record(identifier: str, tag: str, time: str = "2023-06-12T13:25:51+00:00") -> Dict[str, Any]:
    """Build one manifest record the way the endpoint serves it."""
    return {
        "id": identifier,
        "type": tag,
        "url": f"https://piston-meta.mojang.com/v1/packages/abc/{identifier}.json",
        "time": time,
        "releaseTime": time,
        "sha1": "0" * 40,
        "complianceLevel": 1,
    }


@pytest.fixture
def record_factory():
    """Expose make_record to tests."""
    return make_record


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Return a small manifest document, newest version first."""
    return {
        "latest": {"release": "1.20.1", "snapshot": "23w31a"},
        "versions": [
            make_record("23w31a", "snapshot", "2023-08-01T10:03:24+00:00"),
            make_record("1.20.1", "release", "2023-06-12T13:25:51+00:00"),
            make_record("23w18a", "snapshot", "2023-05-03T11:00:00+00:00"),
            make_record("1.20", "release", "2023-06-07T09:35:20+00:00"),
            make_record("b1.8.1", "old_beta", "2011-09-18T22:00:00+00:00"),
            make_record("b1.7.3", "old_beta", "2011-07-07T22:00:00+00:00"),
            make_record("a1.2.6", "old_alpha", "2010-12-02T22:00:00+00:00"),
        ],
    }


@pytest.fixture
def sample_catalog(sample_document):
    """Return a Catalog built from sample_document."""
    from manifest.catalog import Catalog
    return Catalog.from_document(sample_document)


@pytest.fixture
def two_entry_document() -> Dict[str, Any]:
    """One release and one snapshot, release listed first."""
    return {
        "versions": [
            make_record("1.20", "release"),
            make_record("23w10a", "snapshot"),
        ]
    }


# ============================================================================
# Mock Response Fixtures
# ============================================================================

@pytest.fixture
def mock_response():
    """Create a mock HTTP response."""
    def _create_mock(
        status_code: int = 200,
        json_data: Any = None,
        content: bytes = b"",
        headers: Dict[str, str] | None = None
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.json.return_value = json_data if json_data is not None else {}
        response.content = content
        response.text = content.decode("utf-8") if content else ""
        response.headers = headers or {"Content-Type": "application/json"}
        response.raise_for_status = MagicMock()
        if not response.ok:
            response.raise_for_status.side_effect = Exception(f"HTTP {status_code}")
        return response
    return _create_mock
