"""Tests for reading dataset sources."""

import httpx
import pytest

from tallyvotes.sources import SourceError, fetch_url, is_url, read_source

REAL_CLIENT = httpx.Client


@pytest.fixture
def mock_http(monkeypatch):
    """Route httpx.Client requests through a handler set by the test."""
    state = {"handler": None, "requests": []}

    def dispatch(request):
        state["requests"].append(request)
        return state["handler"](request)

    def client(**kwargs):
        return REAL_CLIENT(transport=httpx.MockTransport(dispatch), **kwargs)

    monkeypatch.setattr(httpx, "Client", client)
    return state


class TestReadSource:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "votes.json"
        path.write_bytes(b"[]")
        assert read_source(str(path)) == b"[]"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError, match="missing.json: No such file"):
            read_source(str(tmp_path / "missing.json"))

    def test_directory(self, tmp_path):
        with pytest.raises(SourceError, match=str(tmp_path.name)):
            read_source(str(tmp_path))

    def test_url_is_fetched(self, mock_http):
        mock_http["handler"] = lambda request: httpx.Response(200, content=b"[1]")
        assert read_source("https://example.com/votes.json") == b"[1]"
        assert str(mock_http["requests"][0].url) == "https://example.com/votes.json"

    @pytest.mark.parametrize("source, expected", [
        ("https://example.com/a.json", True),
        ("ftp://example.com/a.json", True),
        ("data/a.json", False),
    ])
    def test_is_url(self, source, expected):
        assert is_url(source) is expected

    def test_paths_refused_when_not_allowed(self, tmp_path):
        path = tmp_path / "votes.json"
        path.write_bytes(b"[]")
        with pytest.raises(SourceError, match=r"Only http\(s\) URLs are accepted"):
            read_source(str(path), allow_paths=False)

    def test_urls_read_when_paths_not_allowed(self, mock_http):
        mock_http["handler"] = lambda request: httpx.Response(200, content=b"[]")
        assert read_source("https://example.com/v.json", allow_paths=False) == b"[]"


class TestFetchUrl:
    def test_invalid_scheme(self):
        with pytest.raises(SourceError, match="Invalid URL scheme: ftp"):
            fetch_url("ftp://example.com/votes.json")

    def test_http_error(self, mock_http):
        mock_http["handler"] = lambda request: httpx.Response(404)
        with pytest.raises(SourceError, match="HTTP error fetching .*: 404"):
            fetch_url("https://example.com/votes.json")

    def test_follows_redirects(self, mock_http):
        def handler(request):
            if request.url.path == "/old.json":
                return httpx.Response(302, headers={"Location": "/new.json"})
            return httpx.Response(200, content=b"[]")

        mock_http["handler"] = handler
        assert fetch_url("https://example.com/old.json") == b"[]"
        assert len(mock_http["requests"]) == 2

    def test_transport_error(self, mock_http):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        mock_http["handler"] = handler
        with pytest.raises(SourceError, match="connection refused"):
            fetch_url("https://example.com/votes.json")
