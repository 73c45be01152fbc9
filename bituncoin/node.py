"""The node's HTTP API: node status, Gold-Coin endpoints and BTN-PAY routes."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable
from urllib.parse import parse_qs, urlsplit

from bituncoin.payments import BtnPay, HttpResponse

VERSION = "1.0.0"
NETWORK = "bituncoin-mainnet"
NODE_TYPE = "full-node"
JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

_LOG = logging.getLogger(__name__)


class NodeError(RuntimeError):
    """Raised when the node is started or stopped in the wrong state."""


@dataclass(frozen=True)
class NodeInfo:
    """A snapshot of the node's identity and state."""

    version: str
    network: str
    node_type: str
    is_running: bool
    block_height: int

    def to_dict(self) -> dict[str, Any]:
        """Return the node information in its JSON form."""
        return {
            "version": self.version,
            "network": self.network,
            "nodeType": self.node_type,
            "isRunning": self.is_running,
            "blockHeight": self.block_height,
        }


@dataclass(frozen=True)
class _Request:
    method: str
    path: str
    query: str
    body: bytes | str | None


Handler = Callable[[_Request], HttpResponse]


def _json(payload: Any, *, sort_keys: bool = False) -> HttpResponse:
    text = json.dumps(payload, separators=(",", ":"), sort_keys=sort_keys) + "\n"
    return HttpResponse(int(HTTPStatus.OK), text, JSON_CONTENT_TYPE)


def _error(message: str, status: HTTPStatus) -> HttpResponse:
    return HttpResponse(int(status), message + "\n", TEXT_CONTENT_TYPE)


def _not_found() -> HttpResponse:
    return _error("404 page not found", HTTPStatus.NOT_FOUND)


class _InvalidBody(Exception):
    pass


def _decode_map(body: bytes | str | None) -> dict[str, Any]:
    """Decode a JSON object body; null counts as an empty object."""
    if body is None:
        raise _InvalidBody
    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        raise _InvalidBody from None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _InvalidBody
    return data


class _ApiServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], node: Node) -> None:
        self.node = node
        super().__init__(address, _RequestHandler)


class _RequestHandler(BaseHTTPRequestHandler):
    server: _ApiServer

    def _serve(self) -> None:
        url = urlsplit(self.path)
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        response = self.server.node.dispatch(self.command, url.path, url.query, body)
        payload = response.body.encode()
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _serve

    def log_message(self, format: str, *args: Any) -> None:
        """Send request logs to the module logger instead of stderr."""
        _LOG.debug("%s - %s", self.address_string(), format % args)


class Node:
    """An API node serving blockchain and payment endpoints over HTTP."""

    def __init__(self, host: str, port: int, *, payments: BtnPay | None = None) -> None:
        self.host = host
        self.port = port
        self.is_running = False
        self.payments = payments if payments is not None else BtnPay()
        self._lock = threading.RLock()
        self._server: _ApiServer | None = None
        self._thread: threading.Thread | None = None
        self._routes: dict[str, Handler] = {
            "/api/info": self._handle_info,
            "/api/health": self._handle_health,
            "/api/goldcoin/balance": self._handle_balance,
            "/api/goldcoin/send": self._handle_send,
            "/api/goldcoin/stake": self._handle_stake,
            "/api/goldcoin/validators": self._handle_validators,
            "/api/btnpay/invoice": lambda r: self.payments.handle_create_invoice(r.method, r.body),
            "/api/btnpay/invoice/": lambda r: self.payments.handle_get_invoice(r.path),
            "/api/btnpay/pay": lambda r: self.payments.handle_pay_invoice(r.method, r.body),
        }

    def start(self) -> None:
        """Bind the HTTP server and serve requests in a background thread."""
        with self._lock:
            if self.is_running:
                raise NodeError("node already running")
            server = _ApiServer((self.host, self.port), self)
            self.port = server.server_address[1]
            self._server = server
            self._thread = threading.Thread(target=server.serve_forever, daemon=True)
            self._thread.start()
            self.is_running = True

    def stop(self) -> None:
        """Stop serving requests."""
        with self._lock:
            if not self.is_running:
                raise NodeError("node not running")
            if self._server is not None:
                self._server.shutdown()
                self._server.server_close()
            if self._thread is not None:
                self._thread.join()
            self._server = None
            self._thread = None
            self.is_running = False

    def get_node_info(self) -> NodeInfo:
        """Return the current node information."""
        with self._lock:
            return NodeInfo(VERSION, NETWORK, NODE_TYPE, self.is_running, 0)

    def dispatch(
        self,
        method: str,
        path: str,
        query: str = "",
        body: bytes | str | None = b"",
    ) -> HttpResponse:
        """Route a request to its handler and return the response."""
        handler = self._route(path)
        if handler is None:
            return _not_found()
        return handler(_Request(method.upper(), path, query or "", body))

    def _route(self, path: str) -> Handler | None:
        exact = self._routes.get(path)
        if exact is not None:
            return exact
        prefixes = [
            pattern
            for pattern in self._routes
            if pattern.endswith("/") and path.startswith(pattern)
        ]
        if not prefixes:
            return None
        return self._routes[max(prefixes, key=len)]

    def _handle_info(self, request: _Request) -> HttpResponse:
        return _json(self.get_node_info().to_dict())

    def _handle_health(self, request: _Request) -> HttpResponse:
        return _json({"status": "ok", "running": self.is_running}, sort_keys=True)

    def _handle_balance(self, request: _Request) -> HttpResponse:
        params = parse_qs(request.query, keep_blank_values=True)
        address = params.get("address", [""])[0]
        return _json({"address": address, "balance": 0, "staked": 0}, sort_keys=True)

    def _handle_send(self, request: _Request) -> HttpResponse:
        if request.method != "POST":
            return _error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            _decode_map(request.body)
        except _InvalidBody:
            return _error("Invalid request body", HTTPStatus.BAD_REQUEST)
        return _json({"status": "pending", "transactionId": "tx_123456789"}, sort_keys=True)

    def _handle_stake(self, request: _Request) -> HttpResponse:
        if request.method != "POST":
            return _error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            data = _decode_map(request.body)
        except _InvalidBody:
            return _error("Invalid request body", HTTPStatus.BAD_REQUEST)
        return _json({"status": "success", "staked": data.get("amount")}, sort_keys=True)

    def _handle_validators(self, request: _Request) -> HttpResponse:
        validators = [
            {"address": "GLDvalidator1...", "stake": 10000, "active": True},
            {"address": "GLDvalidator2...", "stake": 20000, "active": True},
        ]
        return _json({"validators": validators}, sort_keys=True)