import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import Config, normalize_variant, resolve_network
from .errors import (
    ClientUnavailableError,
    ContractSizeError,
    InvalidAddressError,
    InvalidVariantError,
    NoContractError,
    ProviderError,
)
from .history import HistoryStore
from .rpc_client import RpcClient
from .scoring import ContractSizeReport, report_to_dict, score_size, size_bytes_from_bytecode

logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 42
EMPTY_BYTECODE = {"", "0x", "0X"}


class ContractSizeService:
    """Combine configuration, RPC client, scorer and history to serve size checks."""

    def __init__(
        self,
        config: Config,
        client_factory: Optional[Callable[[str], Any]] = None,
        history: Optional[HistoryStore] = None,
    ) -> None:
        self.config = config
        self._client_factory = client_factory or self._default_client_factory
        self._clients: Dict[str, Any] = {}
        if history is None and config.history_enabled:
            history = HistoryStore(config.history_path)
        self.history = history
        self.last_report: Optional[ContractSizeReport] = None
        self.last_error: Optional[str] = None

    def check_contract_size(
        self,
        address: str,
        network: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            try:
                scoring_variant = normalize_variant(variant or self.config.scoring_variant)
            except ValueError as exc:
                raise InvalidVariantError(str(exc)) from exc
            network_label, chain_id, client = self._get_client(network)
            candidate = self._validate_address(address)
            bytecode = self._fetch_bytecode(client, candidate)
            try:
                size_bytes = size_bytes_from_bytecode(bytecode)
            except ValueError as exc:
                raise ProviderError(str(exc)) from exc
            report = score_size(size_bytes, scoring_variant)
        except ContractSizeError as exc:
            self.last_error = str(exc)
            self.last_report = None
            logger.warning("Size check failed for %r: %s", address, exc)
            raise

        self.last_report = report
        self.last_error = None
        logger.info(
            "Contract %s on %s: %.2f KB (%.1f%% of limit)",
            candidate,
            network_label,
            report.size_kb,
            report.percentage_of_limit,
        )

        if self.history is not None:
            self.history.load()
            self.history.record(candidate, report)
            try:
                self.history.save()
            except OSError as exc:
                logger.warning("Could not save history to %s: %s", self.history.path, exc)

        result: Dict[str, Any] = {
            "address": candidate,
            "network": network_label,
            "chain_id": chain_id,
        }
        result.update(report_to_dict(report))
        return result

    def list_history(self) -> List[Dict[str, Any]]:
        if self.history is None:
            return []
        return [entry.to_dict() for entry in self.history.load()]

    def load_from_history(self, address: str) -> Dict[str, Any]:
        if self.history is None:
            raise ValueError("History is disabled.")
        self.history.load()
        entry = self.history.get(address)
        if entry is None:
            raise ValueError(f"No history entry for address '{address}'.")
        self.last_report = entry.report
        self.last_error = None
        return entry.to_dict()

    def clear_history(self) -> Dict[str, Any]:
        if self.history is not None:
            self.history.clear()
        return {"cleared": True}

    def get_network_info(self, network: Optional[str] = None) -> Dict[str, Any]:
        network_label, chain_id, client = self._get_client(network)
        try:
            reported = client.get_chain_id()
        except Exception as exc:  # pylint: disable=broad-except
            raise ProviderError(str(exc) or "Error fetching chain id") from exc
        return {
            "network": network_label,
            "chain_id": chain_id,
            "rpc_url": getattr(client, "rpc_url", None),
            "node_chain_id": str(reported),
            "chain_id_matches": str(reported) == chain_id,
        }

    def _default_client_factory(self, rpc_url: str) -> RpcClient:
        return RpcClient(rpc_url, timeout=self.config.request_timeout)

    def _resolve_network(self, network: Optional[str]) -> Tuple[str, str, Optional[str]]:
        if not network:
            return self.config.network, self.config.chain_id, self.config.rpc_url

        try:
            label, chain_id, rpc_url = resolve_network(network)
        except ValueError as exc:
            raise ClientUnavailableError(str(exc)) from exc

        if label == self.config.network:
            return self.config.network, self.config.chain_id, self.config.rpc_url
        return label, chain_id, rpc_url

    def _get_client(self, network: Optional[str]) -> Tuple[str, str, Any]:
        label, chain_id, rpc_url = self._resolve_network(network)
        if not rpc_url:
            raise ClientUnavailableError(f"No RPC client configured for network '{label}'.")

        client = self._clients.get(rpc_url)
        if client is None:
            try:
                client = self._client_factory(rpc_url)
            except ValueError as exc:
                raise ClientUnavailableError(str(exc)) from exc
            self._clients[rpc_url] = client
        return label, chain_id, client

    def _validate_address(self, address: Any) -> str:
        # Length only; no hex or checksum validation.
        if not isinstance(address, str):
            raise InvalidAddressError("Please enter a valid EVM address")
        candidate = address.strip()
        if len(candidate) != ADDRESS_LENGTH:
            raise InvalidAddressError("Please enter a valid EVM address")
        return candidate

    def _fetch_bytecode(self, client: Any, address: str) -> str:
        try:
            bytecode = client.get_code(address)
        except Exception as exc:  # pylint: disable=broad-except
            raise ProviderError(str(exc) or "Error fetching contract bytecode") from exc

        if bytecode is None or bytecode.strip() in EMPTY_BYTECODE:
            raise NoContractError("No contract found at this address")
        return bytecode
