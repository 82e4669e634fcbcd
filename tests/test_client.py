import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from delorean.reportportal.client import BASE_URL, Client, ReportPortalError

BASE_PATH = "/api/v1"


class _Handler(BaseHTTPRequestHandler):
    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        self.rfile.read(length)
        self.server.received.append({"method": self.command, "path": self.path})
        if not self.path.startswith(BASE_PATH + "/"):
            status, text = 500, "base path prefix is not preserved"
        else:
            status, text = self.server.routes.get(
                self.path[len(BASE_PATH):], (404, "not found")
            )
        data = text.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.routes = {}
    httpd.received = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


@pytest.fixture
def client(server):
    return Client(base_url=f"http://127.0.0.1:{server.server_address[1]}{BASE_PATH}/")


def test_new_client_defaults():
    first = Client()
    second = Client()
    assert first.base_url == BASE_URL
    assert first.session is not second.session


def test_new_request_expands_url_and_encodes_body():
    c = Client()
    req = c.new_request("GET", "foo", {"name": "test"})
    assert req.url == BASE_URL + "foo"
    assert req.data == b'{"name":"test"}\n'
    assert req.headers["Accept"] == "application/json"


def test_new_request_encodes_dataclass():
    @dataclass
    class Input:
        name: str

    req = Client().new_request("POST", "foo", Input(name="test"))
    assert req.data == b'{"name":"test"}\n'


def test_new_request_passes_bytes_through():
    req = Client().new_request("POST", "foo", b"raw")
    assert req.data == b"raw"


def test_new_request_rejects_base_without_trailing_slash():
    c = Client(base_url="http://localhost/api/v1")
    with pytest.raises(ReportPortalError):
        c.new_request("GET", "foo", None)


def test_new_request_rejects_absolute_path():
    with pytest.raises(ReportPortalError):
        Client().new_request("GET", "/foo", None)


def test_do_decodes_json(server, client):
    server.routes["/"] = (200, '{"A":"a"}')
    req = client.new_request("GET", ".", None)
    assert client.do(req) == {"A": "a"}
    assert server.received[-1] == {"method": "GET", "path": BASE_PATH + "/"}


def test_do_empty_body_returns_none(server, client):
    server.routes["/empty"] = (200, "")
    assert client.do(client.new_request("GET", "empty", None)) is None


def test_do_raises_on_http_error(server, client):
    server.routes["/broken"] = (500, '{"message":"boom"}')
    with pytest.raises(ReportPortalError, match="status = 500"):
        client.do(client.new_request("GET", "broken", None))