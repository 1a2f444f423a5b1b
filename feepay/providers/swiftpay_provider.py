"""
SwiftPay Payment Provider
M-Pesa STK Push through the SwiftPay backend.

Supported flows
---------------
STK Push
    POST /api/mpesa/stk-push-api              (Bearer <api key>)
    POST /api/mpesa-verification-proxy        (status lookup, api key in body)

SwiftPay is not consistent about where it puts things: the checkout id and
the status text show up under different keys depending on the response
version. Each value is read through an ordered list of key paths and the
first non-empty match wins.

Required config keys
--------------------
    api_key     – SwiftPay API key (initiate and status)
    till_id     – Merchant till identifier (initiate only)

Optional config keys
--------------------
    base_url    – SwiftPay backend URL
    timeout     – Per-request timeout in seconds (default 30)
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import requests

from feepay.models.payment import ChargeRequest
from feepay.providers.base import (
    PaymentProvider,
    PaymentInitializationError,
    PaymentVerificationError,
    ProviderConfigurationError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://swiftpay-backend-uvv9.onrender.com"

# Extraction rules, tried in order
CHECKOUT_ID_PATHS: Sequence[Tuple[str, ...]] = (
    ("data", "checkout_id"),
    ("data", "checkoutId"),
    ("data", "CheckoutRequestID"),
    ("checkoutRequestId",),
    ("CheckoutRequestID",),
    ("checkout_id",),
    ("checkoutId",),
)

STATUS_TEXT_PATHS: Sequence[Tuple[str, ...]] = (
    ("status",),
    ("data", "status"),
    ("data", "state"),
    ("result", "status"),
)

MESSAGE_PATHS: Sequence[Tuple[str, ...]] = (
    ("message",),
    ("error",),
    ("data", "message"),
)

PAID_STATUSES = frozenset({"success", "paid", "completed"})
FAILED_STATUSES = frozenset({"failed", "cancelled", "canceled"})


def extract_first(data: Any, paths: Iterable[Tuple[str, ...]]) -> Optional[Any]:
    """Return the first non-empty value found under any of the key paths."""
    if not isinstance(data, dict):
        return None

    for path in paths:
        node: Any = data
        for key in path:
            if not isinstance(node, dict):
                node = None
                break
            node = node.get(key)
        if node is None or node == "":
            continue
        if isinstance(node, (dict, list)):
            continue
        return node

    return None


def map_status(data: Any) -> str:
    """
    Map a status lookup body to "paid", "failed" or "pending".

    The status text decides. The boolean ``success`` flag never decides on
    its own; it can only veto a text that contradicts it, and a
    contradiction stays "pending".
    """
    text = str(extract_first(data, STATUS_TEXT_PATHS) or "").strip().lower()
    success_flag = data.get("success") if isinstance(data, dict) else None

    if text in PAID_STATUSES and success_flag is not False:
        return "paid"
    if text in FAILED_STATUSES and success_flag is not True:
        return "failed"
    return "pending"


class SwiftPayProvider(PaymentProvider):
    """SwiftPay STK Push provider adapter."""

    _EP_STK_PUSH = "/api/mpesa/stk-push-api"
    _EP_STATUS   = "/api/mpesa-verification-proxy"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)

        self.api_key  = config.get("api_key") or ""
        self.till_id  = str(config.get("till_id") or "")
        self.base_url = (config.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout  = float(config.get("timeout") or 30)

        if not self.api_key:
            raise ProviderConfigurationError("SwiftPayProvider: 'api_key' is required")

        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    # PaymentProvider ABC

    def initiate_charge(self, charge: ChargeRequest) -> Dict[str, Any]:
        """
        Send an STK push for the charge.

        Exactly one POST is made; nothing here retries.
        """
        if not self.till_id:
            raise ProviderConfigurationError("SwiftPayProvider [initiate]: 'till_id' is required")

        payload = {
            "phone_number": charge.phone,
            "amount":       charge.amount,
            "till_id":      self.till_id,
            "reference":    charge.reference,
            "description":  charge.description,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            resp = self._session.post(
                f"{self.base_url}{self._EP_STK_PUSH}",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PaymentInitializationError(
                f"SwiftPayProvider [initiate]: network error – {exc}"
            ) from exc

        data = self._parse_body(resp, "initiate")

        if not resp.ok or data is None:
            raise PaymentInitializationError(
                extract_first(data, MESSAGE_PATHS) or "Payment initiation failed",
                status_code=resp.status_code,
                raw=data,
            )

        if data.get("success") is False:
            raise PaymentInitializationError(
                extract_first(data, MESSAGE_PATHS) or "Payment initiation failed",
                raw=data,
            )

        checkout_id = extract_first(data, CHECKOUT_ID_PATHS)
        if checkout_id is None:
            raise PaymentInitializationError(
                "Payment gateway did not return a checkout id",
                raw=data,
            )

        return {
            "transaction_id": str(checkout_id),
            "status":         "initiated",
            "message":        extract_first(data, MESSAGE_PATHS),
            "additional_data": {
                "reference":    charge.reference,
                "raw_response": data,
            },
        }

    def query_status(self, checkout_id: str) -> Dict[str, Any]:
        """Probe the gateway once for the state of checkout_id."""
        payload = {"checkoutId": checkout_id, "apiKey": self.api_key}

        try:
            resp = self._session.post(
                f"{self.base_url}{self._EP_STATUS}",
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PaymentVerificationError(
                f"SwiftPayProvider [status]: network error – {exc}"
            ) from exc

        data = self._parse_body(resp, "status")

        if not resp.ok or data is None:
            raise PaymentVerificationError(
                extract_first(data, MESSAGE_PATHS) or "Status check failed",
                status_code=resp.status_code,
                raw=data,
            )

        return {
            "status":  map_status(data),
            "message": extract_first(data, MESSAGE_PATHS),
            "additional_data": {
                "status_text":  extract_first(data, STATUS_TEXT_PATHS),
                "raw_response": data,
            },
        }

    def close(self) -> None:
        self._session.close()

    # Private – HTTP helpers

    @staticmethod
    def _parse_body(resp: requests.Response, context: str) -> Optional[Dict[str, Any]]:
        """Return the JSON object body, or None when it is missing or not an object."""
        try:
            data = resp.json()
        except ValueError:
            logger.warning("SwiftPay [%s] HTTP %s: unparsable body", context, resp.status_code)
            return None

        logger.debug("SwiftPay [%s] HTTP %s: %s", context, resp.status_code, data)

        if not isinstance(data, dict):
            return None
        return data
