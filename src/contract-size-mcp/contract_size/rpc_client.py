import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class RpcClient:
    """Minimal JSON-RPC 2.0 client for EVM nodes (HTTP POST, single attempt)."""

    def __init__(
        self,
        rpc_url: str,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        url = (rpc_url or "").strip()
        if not url:
            raise ValueError("rpc_url must be a non-empty string.")

        self.rpc_url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if headers:
            self.session.headers.update(dict(headers))
        self._next_id = 1

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        if not isinstance(method, str) or not method.strip():
            raise ValueError("method must be a non-empty string.")
        if params is None:
            params = []
        if not isinstance(params, list):
            raise ValueError("params must be a list.")

        payload = {
            "jsonrpc": "2.0",
            "id": self._next_id,
            "method": method,
            "params": params,
        }
        self._next_id += 1

        logger.debug("RPC %s %s -> %s", method, params, self.rpc_url)
        response = self.session.post(
            self.rpc_url,
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected JSON-RPC response (non-object).")

        error_obj = data.get("error")
        if isinstance(error_obj, dict):
            code = error_obj.get("code")
            message = error_obj.get("message")
            err_data = error_obj.get("data")
            parts: list[str] = []
            if code is not None:
                parts.append(f"code {code}")
            if message:
                parts.append(str(message))
            if err_data:
                parts.append(str(err_data))
            detail = ": ".join(parts) if parts else "unknown error"
            raise ValueError(f"RPC error: {detail}.")

        if "result" not in data:
            raise ValueError("Unexpected JSON-RPC response (missing result).")
        return data.get("result")

    def get_code(self, address: str, block_tag: str = "latest") -> Optional[str]:
        result = self.call("eth_getCode", [address, block_tag])
        if result is None:
            return None
        if not isinstance(result, str):
            raise ValueError("RPC error: eth_getCode returned unexpected result.")
        return result

    def get_chain_id(self) -> int:
        result = self.call("eth_chainId", [])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ValueError("RPC error: eth_chainId returned unexpected result.")
        return int(result, 16)
