"""BTN-PAY: in-memory invoices and the HTTP handlers that serve them."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable

DEFAULT_TTL_SECONDS = 15 * 60
JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class PaymentError(ValueError):
    """Raised when an invoice operation is rejected."""


class InvoiceStatus(str, Enum):
    """The states an invoice moves through."""

    PENDING = "pending"
    PAID = "paid"
    EXPIRED = "expired"
    FAILED = "failed"


@dataclass
class Invoice:
    """A payment request from a merchant."""

    id: str
    merchant: str
    amount: float
    currency: str
    memo: str
    created_at: int
    expires_at: int
    status: InvoiceStatus = InvoiceStatus.PENDING
    tx_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the invoice in its JSON form."""
        data: dict[str, Any] = {
            "id": self.id,
            "merchant": self.merchant,
            "amount": self.amount,
            "currency": self.currency,
            "memo": self.memo,
            "createdAt": self.created_at,
            "expiresAt": self.expires_at,
            "status": self.status.value,
        }
        if self.tx_id:
            data["txId"] = self.tx_id
        return data


@dataclass(frozen=True)
class HttpResponse:
    """The status, body and content type a handler answers with."""

    status: int
    body: str
    content_type: str = TEXT_CONTENT_TYPE


def _error(message: str, status: HTTPStatus) -> HttpResponse:
    return HttpResponse(int(status), message + "\n", TEXT_CONTENT_TYPE)


def _json(payload: Any) -> HttpResponse:
    return HttpResponse(
        int(HTTPStatus.OK),
        json.dumps(payload, separators=(",", ":")) + "\n",
        JSON_CONTENT_TYPE,
    )


class _BadRequest(Exception):
    pass


def _decode_object(body: bytes | str | None, fields: dict[str, tuple[type, ...]]) -> dict[str, Any]:
    """Decode a JSON object, checking the types of the known fields."""
    if body is None:
        raise _BadRequest
    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        raise _BadRequest from None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise _BadRequest
    result: dict[str, Any] = {}
    for name, types in fields.items():
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, types):
            raise _BadRequest
        result[name] = value
    return result


def split_path(path: str) -> list[str]:
    """Return the non-empty segments of a slash-separated path."""
    return [part for part in path.split("/") if part]


class BtnPay:
    """Keeps invoices in memory and settles them."""

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self.invoices: dict[str, Invoice] = {}
        self._clock = clock
        self._lock = threading.RLock()

    def _new_id(self) -> str:
        stamp = time.time_ns()
        while f"btnpay_{stamp}" in self.invoices:
            stamp += 1
        return f"btnpay_{stamp}"

    def create_invoice(
        self, merchant: str, amount: float, memo: str, ttl_seconds: int
    ) -> Invoice:
        """Create a pending invoice that expires after ttl_seconds."""
        if not merchant:
            raise PaymentError("merchant required")
        if amount <= 0:
            raise PaymentError("amount must be > 0")
        with self._lock:
            now = int(self._clock())
            invoice = Invoice(
                id=self._new_id(),
                merchant=merchant,
                amount=amount,
                currency="GLD",
                memo=memo,
                created_at=now,
                expires_at=now + ttl_seconds,
            )
            self.invoices[invoice.id] = invoice
            return invoice

    def get_invoice(self, invoice_id: str) -> Invoice:
        """Return an invoice, marking it expired if its time has passed."""
        with self._lock:
            invoice = self.invoices.get(invoice_id)
            if invoice is None:
                raise PaymentError("invoice not found")
            if self._clock() > invoice.expires_at and invoice.status is InvoiceStatus.PENDING:
                invoice.status = InvoiceStatus.EXPIRED
            return invoice

    def mark_paid(self, invoice_id: str, tx_id: str) -> None:
        """Mark a pending invoice as paid by the given transaction."""
        with self._lock:
            invoice = self.invoices.get(invoice_id)
            if invoice is None:
                raise PaymentError("invoice not found")
            if invoice.status is not InvoiceStatus.PENDING:
                raise PaymentError("invoice not pending")
            invoice.status = InvoiceStatus.PAID
            invoice.tx_id = tx_id

    def handle_create_invoice(self, method: str, body: bytes | str | None) -> HttpResponse:
        """Handle POST /api/btnpay/invoice."""
        if method != "POST":
            return _error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            request = _decode_object(
                body,
                {
                    "merchant": (str,),
                    "amount": (int, float),
                    "memo": (str,),
                    "ttlSeconds": (int,),
                },
            )
        except _BadRequest:
            return _error("invalid request body", HTTPStatus.BAD_REQUEST)
        ttl = request.get("ttlSeconds", 0) or DEFAULT_TTL_SECONDS
        try:
            invoice = self.create_invoice(
                request.get("merchant", ""),
                float(request.get("amount", 0.0)),
                request.get("memo", ""),
                ttl,
            )
        except PaymentError as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        return _json(invoice.to_dict())

    def handle_get_invoice(self, path: str) -> HttpResponse:
        """Handle GET /api/btnpay/invoice/{id}, taking the last path segment as the ID."""
        parts = split_path(path)
        if not parts:
            return _error("invoice id required", HTTPStatus.BAD_REQUEST)
        try:
            invoice = self.get_invoice(parts[-1])
        except PaymentError as exc:
            return _error(str(exc), HTTPStatus.NOT_FOUND)
        return _json(invoice.to_dict())

    def handle_pay_invoice(self, method: str, body: bytes | str | None) -> HttpResponse:
        """Handle POST /api/btnpay/pay."""
        if method != "POST":
            return _error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            request = _decode_object(
                body, {"invoiceId": (str,), "from": (str,), "txId": (str,)}
            )
        except _BadRequest:
            return _error("invalid request body", HTTPStatus.BAD_REQUEST)
        invoice_id = request.get("invoiceId", "")
        tx_id = request.get("txId", "")
        if not invoice_id or not tx_id:
            return _error("invoiceId and txId required", HTTPStatus.BAD_REQUEST)
        try:
            self.mark_paid(invoice_id, tx_id)
        except PaymentError as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        return _json({"status": "paid"})