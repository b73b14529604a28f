"""Unit tests for URL building and JSON helpers of the remote client."""

import httpx
import pytest

from smack.exceptions import ConfigurationError
from smack.models import RemoteServerRecord
from smack.remote_client import (
    RemoteClient,
    escape_data,
    get_json_items,
    get_json_string,
    get_json_true,
    get_validated_base_url,
    redact_api_key,
)


@pytest.fixture
def client():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    return RemoteClient(httpx.AsyncClient(transport=transport))


@pytest.mark.unit
class TestStreamUrl:
    """Tests for building stream URLs."""

    def test_builds_expected_url(self, client):
        server = RemoteServerRecord(
            server_url="https://remote.example.com/jellyfin", api_key="ABC123"
        )

        url = client.build_stream_url(server, "item-42")

        assert (
            url
            == "https://remote.example.com/jellyfin/Items/item-42/Download?api_key=ABC123"
        )

    def test_normalizes_trailing_slash(self, client):
        server = RemoteServerRecord(
            server_url="https://remote.example.com/jellyfin/", api_key="key"
        )

        url = client.build_stream_url(server, "item-1")

        assert url == "https://remote.example.com/jellyfin/Items/item-1/Download?api_key=key"

    @pytest.mark.parametrize("item_id", [None, "", "   "])
    def test_returns_none_for_blank_item_id(self, client, item_id):
        server = RemoteServerRecord(server_url="https://remote.example.com", api_key="key")

        assert client.build_stream_url(server, item_id) is None

    def test_raises_for_invalid_server_url(self, client):
        server = RemoteServerRecord(server_url="not-a-url", api_key="key")

        with pytest.raises(ConfigurationError):
            client.build_stream_url(server, "item")

    @pytest.mark.parametrize("port", ["notaport", "99999"])
    def test_raises_for_invalid_port(self, client, port):
        server = RemoteServerRecord(
            server_url=f"https://remote.example.com:{port}/jellyfin", api_key="key"
        )

        with pytest.raises(ConfigurationError, match="not a valid absolute URL"):
            client.build_stream_url(server, "item")

    def test_escapes_item_id(self, client):
        server = RemoteServerRecord(server_url="https://remote.example.com", api_key="simplekey")

        url = client.build_stream_url(server, "item&special")

        assert "Items/item%26special/Download" in url
        assert "item&special" not in url

    def test_escapes_api_key(self, client):
        server = RemoteServerRecord(server_url="https://remote.example.com", api_key="a+b/c=")

        url = client.build_stream_url(server, "item")

        assert url.endswith("?api_key=a%2Bb%2Fc%3D")

    def test_requires_server(self, client):
        with pytest.raises(ValueError):
            client.build_stream_url(None, "item")


@pytest.mark.unit
class TestBaseUrl:
    """Tests for base URL validation and normalization."""

    @pytest.mark.parametrize(
        "server_url",
        [
            "not-a-url",
            "invalid",
            "",
            None,
            "localhost:8096",
            "/jellyfin",
            "https://remote.example.com:notaport",
            "https://remote.example.com:99999",
        ],
    )
    def test_rejects_non_absolute_urls(self, server_url):
        with pytest.raises(ConfigurationError):
            get_validated_base_url(server_url)

    def test_accepts_explicit_port(self):
        assert (
            get_validated_base_url(" http://192.168.1.10:8096 ")
            == "http://192.168.1.10:8096/"
        )

    def test_normalization_is_idempotent(self):
        without_slash = get_validated_base_url("https://remote.example.com/jellyfin")
        with_slash = get_validated_base_url("https://remote.example.com/jellyfin/")

        assert without_slash == with_slash == "https://remote.example.com/jellyfin/"
        assert get_validated_base_url(without_slash) == without_slash

    def test_host_only_url_gets_slash(self):
        assert get_validated_base_url("http://10.0.0.5:8096") == "http://10.0.0.5:8096/"

    def test_surrounding_whitespace_ignored(self):
        assert get_validated_base_url("  https://a.example.com  ") == "https://a.example.com/"


@pytest.mark.unit
class TestJsonHelpers:
    """Tests for reading loosely-typed JSON."""

    def test_get_json_string(self):
        element = {"Id": "abc", "Count": 3, "Missing": None}

        assert get_json_string(element, "Id") == "abc"
        assert get_json_string(element, "Count") == ""
        assert get_json_string(element, "Missing") == ""
        assert get_json_string(element, "Absent") == ""
        assert get_json_string(["Id"], "Id") == ""

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (False, False), ("true", False), (1, False), (None, False)],
    )
    def test_get_json_true(self, value, expected):
        assert get_json_true({"IsFolder": value}, "IsFolder") is expected

    def test_get_json_true_absent(self):
        assert get_json_true({}, "IsFolder") is False
        assert get_json_true("IsFolder", "IsFolder") is False

    def test_get_json_items(self):
        assert get_json_items({"Items": [{"Id": "1"}]}) == [{"Id": "1"}]
        assert get_json_items({"Items": {"Id": "1"}}) == []
        assert get_json_items({"TotalRecordCount": 0}) == []
        assert get_json_items([{"Id": "1"}]) == []


@pytest.mark.unit
def test_escape_data():
    assert escape_data("item-42_a.b~c") == "item-42_a.b~c"
    assert escape_data("a b&c/d?e#f") == "a%20b%26c%2Fd%3Fe%23f"
    assert escape_data(None) == ""


@pytest.mark.unit
def test_redact_api_key():
    url = "https://a/Users/Me/Items?ParentId=1&api_key=secret&x=1"

    assert redact_api_key(url) == "https://a/Users/Me/Items?ParentId=1&api_key=***&x=1"


@pytest.mark.unit
def test_client_requires_http_client():
    with pytest.raises(ValueError):
        RemoteClient(None)
