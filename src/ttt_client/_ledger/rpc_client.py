# Area: Ledger
"""
ttt_client._ledger.rpc_client — Solana JSON-RPC transport
=========================================================

Thin wrapper around ``requests`` that posts JSON-RPC 2.0 calls and
separates transport failures (TransportError) from RPC-level errors
(RpcError, returned by the node in the ``error`` member).
"""

from __future__ import annotations
import itertools
import logging
from typing import Any, List, Optional

import requests

from ..errors import TransportError

logger = logging.getLogger("ttt_client.ledger.rpc")


class RpcError(Exception):
    """An ``error`` object returned by the RPC node."""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        message = error.get("message") if isinstance(error, dict) else str(error)
        super().__init__(f"{method}: {message}")


class RpcClient:
    """Minimal JSON-RPC client for a Solana node."""

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Invoke ``method`` and return its ``result`` member.

        Raises:
            TransportError: On connection failure, HTTP error or non-JSON body
            RpcError: When the node answers with an ``error`` member
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        logger.debug("RPC → %s", method)
        try:
            resp = self._session.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as e:
            raise TransportError(f"RPC {method} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"RPC {method} returned a non-JSON body") from e

        if "error" in body:
            raise RpcError(method, body["error"])
        if "result" not in body:
            raise TransportError(f"RPC {method} response has no result")
        return body["result"]
