import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from numberlib.config import DEFAULT_VERIFY_CODE_REGEX
from numberlib.extract import PatternError
from numberlib.fetch import (
    FetchError,
    fetch_content,
    fetch_verify_code,
    normalize_link,
)


@pytest.fixture
def server(monkeypatch):
    for name in ("http_proxy", "HTTP_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(name, raising=False)
    pages = {}

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = pages.get(self.path)
            if body is None:
                self.send_response(404)
                self.end_headers()
                return
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    host = f"127.0.0.1:{httpd.server_address[1]}"
    yield host, pages
    httpd.shutdown()
    httpd.server_close()


@pytest.mark.parametrize(
    "link, expected",
    [
        ("example.com/page", "http://example.com/page"),
        ("http://example.com/a", "http://example.com/a"),
        ("HTTPS://example.com/b", "HTTPS://example.com/b"),
        ("https://example.com", "https://example.com"),
    ],
)
def test_normalize_link(link, expected):
    assert normalize_link(link) == expected


def test_normalize_link_is_idempotent():
    once = normalize_link("example.com")
    assert normalize_link(once) == once


def test_fetch_content_decodes_utf8(server):
    host, pages = server
    text = "您的验证码 123456，短信登录验证码"
    pages["/page"] = text.encode("utf-8")
    assert fetch_content(f"http://{host}/page") == text


def test_fetch_content_adds_scheme(server):
    host, pages = server
    pages["/plain"] = b"hello"
    assert fetch_content(f"{host}/plain") == "hello"


def test_fetch_content_missing_page_raises(server):
    host, _ = server
    with pytest.raises(FetchError):
        fetch_content(f"http://{host}/missing")


def test_fetch_content_empty_page_raises(server):
    host, pages = server
    pages["/empty"] = b""
    with pytest.raises(FetchError, match="内容为空"):
        fetch_content(f"http://{host}/empty")


def test_fetch_verify_code_default_pattern(server):
    host, pages = server
    pages["/sms"] = "【平台】123456，短信登录验证码，5分钟内有效".encode("utf-8")
    assert fetch_verify_code(f"{host}/sms", DEFAULT_VERIFY_CODE_REGEX) == "123456"


def test_fetch_verify_code_no_match_raises(server):
    host, pages = server
    pages["/none"] = "no code here".encode("utf-8")
    with pytest.raises(FetchError, match="未匹配到验证码"):
        fetch_verify_code(f"{host}/none", DEFAULT_VERIFY_CODE_REGEX)


def test_fetch_verify_code_bad_pattern_raises(server):
    host, pages = server
    pages["/x"] = b"123456"
    with pytest.raises(PatternError):
        fetch_verify_code(f"{host}/x", "(\\d{6")