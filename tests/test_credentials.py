import pytest

from pinecone_proxy.config.credentials import resolve_credentials, normalize_host, first_non_empty
from pinecone_proxy.utils.errors import ConfigurationError


def test_first_listed_name_with_value_wins():
    env = {"B": "key-b", "C": "key-c", "HOST": "idx.io"}
    creds = resolve_credentials(["A", "B", "C"], ["HOST"], env)
    assert creds.api_key == "key-b"
    assert creds.api_key_source == "B"
    assert creds.host_source == "HOST"


def test_empty_value_is_skipped():
    env = {"A": "", "B": "key-b", "H1": "", "H2": "idx.io"}
    creds = resolve_credentials(["A", "B"], ["H1", "H2"], env)
    assert creds.api_key_source == "B"
    assert creds.host_source == "H2"


def test_first_non_empty_returns_none_when_nothing_matches():
    assert first_non_empty(["X", "Y"], {"Z": "1"}) == (None, None)


def test_https_prefix_stripped_from_host():
    creds = resolve_credentials(["K"], ["H"], {"K": "key", "H": "https://example.io"})
    assert creds.host == "example.io"


def test_normalize_host():
    assert normalize_host("example.io") == "example.io"
    assert normalize_host("https://example.io") == "example.io"
    # only one prefix is removed
    assert normalize_host("https://https://example.io") == "https://example.io"
    assert normalize_host("http://example.io") == "http://example.io"


def test_missing_both_raises_configuration_error():
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_credentials(["K1", "K2"], ["H1"], {})
    err = exc_info.value
    assert err.status_code == 500
    body = err.to_body()
    assert body["hasApiKey"] is False
    assert body["hasIndexHost"] is False
    assert body["checked"] == {"apiKey": ["K1", "K2"], "indexHost": ["H1"]}


def test_missing_host_only():
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_credentials(["K"], ["H"], {"K": "key"})
    assert exc_info.value.has_api_key is True
    assert exc_info.value.has_index_host is False
