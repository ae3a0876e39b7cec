"""Tests for heliodash.config."""

import pytest

from heliodash import config


class TestProxyUrl:
    def test_default(self):
        assert config.get_proxy_url() == config.DEFAULT_PROXY_URL

    def test_set_strips_trailing_slash(self):
        config.set_proxy_url("https://proxy.example.org/api/")
        assert config.get_proxy_url() == "https://proxy.example.org/api"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("HELIODASH_PROXY_URL", "https://env.example.org/api/")
        assert config.get_proxy_url() == "https://env.example.org/api"

    def test_override_beats_env_var(self, monkeypatch):
        monkeypatch.setenv("HELIODASH_PROXY_URL", "https://env.example.org/api")
        config.set_proxy_url("http://localhost:9000/api")
        assert config.get_proxy_url() == "http://localhost:9000/api"

    def test_clear_override(self):
        config.set_proxy_url("http://localhost:9000/api")
        config.set_proxy_url(None)
        assert config.get_proxy_url() == config.DEFAULT_PROXY_URL

    def test_rejects_non_http(self):
        with pytest.raises(ValueError, match="http"):
            config.set_proxy_url("ftp://example.org")


class TestRequestTimeout:
    def test_default(self):
        assert config.get_request_timeout() == 30.0

    def test_set(self):
        config.set_request_timeout(5)
        assert config.get_request_timeout() == 5.0
        assert isinstance(config.get_request_timeout(), float)

    @pytest.mark.parametrize("bad", [0, -1.0])
    def test_rejects_non_positive(self, bad):
        with pytest.raises(ValueError, match="positive"):
            config.set_request_timeout(bad)


class TestConstants:
    def test_refresh_intervals(self):
        assert config.FAST_REFRESH_INTERVAL == 60.0
        assert config.SLOW_REFRESH_INTERVAL == 900.0

    def test_cache_ttls(self):
        assert config.OVATION_CACHE_TTL == 600.0
        assert config.SOLAR_FRAMES_CACHE_TTL == 300.0
        assert config.ENLIL_CACHE_TTL == 900.0
