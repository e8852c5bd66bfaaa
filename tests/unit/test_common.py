"""Unit tests for small pure helpers (common utils, caching, client config)."""
from datetime import datetime

import pytest

from api.utils.caching import compute_etag, etag_matches
from api.utils.common import generate_code, iso_format, lesson_sort_key
from sync_client.config import SyncClientConfig


@pytest.mark.unit
class TestCommon:
    def test_iso_format_appends_z(self):
        assert iso_format(datetime(2025, 1, 15, 12, 30, 0)) == "2025-01-15T12:30:00Z"

    def test_generate_code_is_six_digits(self):
        for _ in range(50):
            code = generate_code()
            assert len(code) == 6 and code.isdigit()

    def test_lesson_ids_sort_numerically(self):
        ids = ["10", "2", "1", "intro", "3"]
        assert sorted(ids, key=lesson_sort_key) == ["1", "2", "3", "10", "intro"]


@pytest.mark.unit
class TestEtags:
    def test_etag_is_quoted_and_stable(self):
        etag = compute_etag(b"[1,2,3]")
        assert etag.startswith('"') and etag.endswith('"')
        assert etag == compute_etag(b"[1,2,3]")
        assert etag != compute_etag(b"[1,2]")

    def test_matches(self):
        etag = compute_etag(b"x")
        assert etag_matches(etag, etag)
        assert etag_matches(f'"other", {etag}', etag)
        assert etag_matches(f"W/{etag}", etag)
        assert etag_matches("*", etag)
        assert not etag_matches(None, etag)
        assert not etag_matches('"other"', etag)


@pytest.mark.unit
class TestSyncClientConfig:
    def test_strips_trailing_slash(self):
        assert SyncClientConfig(api_base="https://api.example.com/v1/").api_base == "https://api.example.com/v1"

    def test_requires_base(self):
        with pytest.raises(ValueError):
            SyncClientConfig(api_base="  ")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LINGUA_API_BASE", "http://localhost:8000/")
        monkeypatch.setenv("LINGUA_API_TIMEOUT", "2.5")
        config = SyncClientConfig.from_env()
        assert config.api_base == "http://localhost:8000"
        assert config.timeout_seconds == 2.5
