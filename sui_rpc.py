"""
Minimal async Sui JSON-RPC client on top of aiohttp.

Only the handful of methods kaizen needs are wrapped. The client can own its
session (use it as an async context manager) or borrow a shared one.
"""

import itertools
import logging
from typing import Any, Dict, List, Optional

import aiohttp
import ujson

from kaizen_errors import SuiRpcError

logger = logging.getLogger(__name__)


class SuiClient:
    def __init__(self, url: str, session: Optional[aiohttp.ClientSession] = None):
        self.url = url
        self.session = session
        self._owns_session = session is None
        self._ids = itertools.count(1)

        # performance metrics
        self.api_calls = 0

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None

    def __repr__(self):
        return f"SuiClient({self.url!r})"

    async def call(self, method: str, params: List[Any]) -> Any:
        """send one JSON-RPC request and return its result"""
        if self.session is None:
            raise RuntimeError("SuiClient has no session, use 'async with SuiClient(...)' or pass one in")

        self.api_calls += 1
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        logger.debug(f"RPC #{self.api_calls}: {method} -> {self.url}")

        async with self.session.post(self.url, json=payload) as response:
            text = await response.text()

            if response.status != 200:
                raise SuiRpcError(method, f"HTTP {response.status}: {text[:200]}")

            try:
                body = ujson.loads(text)
            except ValueError as e:
                raise SuiRpcError(method, f"malformed response: {e}")

        if not isinstance(body, dict):
            raise SuiRpcError(method, "malformed response: expected a JSON object")

        error = body.get("error")
        if error:
            if isinstance(error, dict):
                raise SuiRpcError(method, error.get("message", str(error)), error.get("code"))
            raise SuiRpcError(method, str(error))

        return body.get("result")

    async def get_all_balances(self, owner: str) -> List[Dict[str, Any]]:
        result = await self.call("suix_getAllBalances", [owner])
        if not isinstance(result, list):
            raise SuiRpcError("suix_getAllBalances", "malformed response: expected a list")
        return result

    async def get_object(
        self,
        object_id: str,
        show_content: bool = False,
        show_display: bool = False,
        show_owner: bool = False,
        show_type: bool = False,
    ) -> Dict[str, Any]:
        options = {
            "showContent": show_content,
            "showDisplay": show_display,
            "showOwner": show_owner,
            "showType": show_type,
        }
        return await self.call("sui_getObject", [object_id, options]) or {}

    async def unsafe_publish(
        self,
        sender: str,
        modules: List[str],
        dependencies: List[str],
        gas_budget: int,
        gas: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Ask the node to build a publish transaction.

        The node transfers the resulting UpgradeCap to the sender, so the
        returned txBytes only need signing.
        """
        return await self.call("unsafe_publish", [sender, modules, dependencies, gas, str(gas_budget)])

    async def execute_transaction_block(
        self,
        tx_bytes: str,
        signatures: List[str],
        show_effects: bool = True,
        show_object_changes: bool = True,
    ) -> Dict[str, Any]:
        options = {"showEffects": show_effects, "showObjectChanges": show_object_changes}
        return await self.call(
            "sui_executeTransactionBlock",
            [tx_bytes, signatures, options, "WaitForLocalExecution"],
        )
