import pytest

from heliodash.config import DEFAULT_REQUEST_TIMEOUT, set_proxy_url, set_request_timeout


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch):
    """Start every test from the default configuration.

    Clears any proxy URL override and the environment variable so tests do
    not depend on the developer's shell, and restores the default timeout.
    """
    monkeypatch.delenv("HELIODASH_PROXY_URL", raising=False)
    set_proxy_url(None)
    set_request_timeout(DEFAULT_REQUEST_TIMEOUT)
    yield
    set_proxy_url(None)
    set_request_timeout(DEFAULT_REQUEST_TIMEOUT)
