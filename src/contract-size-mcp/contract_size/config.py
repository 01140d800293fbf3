import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_NETWORK = "monad-testnet"
DEFAULT_HISTORY_PATH = os.path.expanduser(os.path.join("~", ".contract-size", "history.json"))
SCORING_VARIANTS = ("A", "B")
DEFAULT_SCORING_VARIANT = "B"

# name -> (chain id, default public RPC endpoint)
NETWORKS = {
    "mainnet": ("1", "https://ethereum-rpc.publicnode.com"),
    "sepolia": ("11155111", "https://ethereum-sepolia-rpc.publicnode.com"),
    "monad-testnet": ("10143", "https://testnet-rpc.monad.xyz"),
}

NETWORK_ALIASES = {
    "ethereum": "mainnet",
    "eth": "mainnet",
    "monad": "monad-testnet",
}


@dataclass
class Config:
    network: str = DEFAULT_NETWORK
    chain_id: str = NETWORKS[DEFAULT_NETWORK][0]
    rpc_url: Optional[str] = NETWORKS[DEFAULT_NETWORK][1]
    rpc_url_override: Optional[str] = None
    chain_id_override: Optional[str] = None
    request_timeout: Optional[float] = None
    scoring_variant: str = DEFAULT_SCORING_VARIANT
    history_path: str = DEFAULT_HISTORY_PATH
    history_enabled: bool = True
    log_level: str = "WARNING"


def resolve_network(network: str) -> Tuple[str, str, Optional[str]]:
    """Resolve a network name or numeric chain id to (label, chain_id, default_rpc_url)."""
    normalized = (network or "").strip().lower()
    if not normalized:
        raise ValueError("network must be a non-empty string.")

    if normalized.isdigit():
        for label, (chain_id, rpc_url) in NETWORKS.items():
            if chain_id == normalized:
                return label, chain_id, rpc_url
        return normalized, normalized, None

    normalized = NETWORK_ALIASES.get(normalized, normalized)
    if normalized in NETWORKS:
        chain_id, rpc_url = NETWORKS[normalized]
        return normalized, chain_id, rpc_url

    allowed = ", ".join(sorted(list(NETWORKS.keys()) + list(NETWORK_ALIASES.keys())) + ["<chain_id>"])
    raise ValueError(
        f"Unknown network '{network}'. Supported: {allowed}. "
        "Provide a numeric chain id together with RPC_URL for other networks."
    )


def normalize_variant(variant: Optional[str]) -> str:
    candidate = (variant or DEFAULT_SCORING_VARIANT).strip().upper()
    if candidate not in SCORING_VARIANTS:
        raise ValueError(f"Unknown scoring variant '{variant}'. Expected A or B.")
    return candidate


def _parse_bool(value: str) -> bool:
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def load_config() -> Config:
    """Load configuration from environment variables."""
    network_env = os.getenv("NETWORK", DEFAULT_NETWORK)
    rpc_url_env = os.getenv("RPC_URL")
    chain_id_env = os.getenv("CHAIN_ID")
    timeout_env = os.getenv("REQUEST_TIMEOUT")
    variant = normalize_variant(os.getenv("SCORING_VARIANT", DEFAULT_SCORING_VARIANT))
    history_path = os.getenv("HISTORY_PATH", DEFAULT_HISTORY_PATH)
    history_enabled = _parse_bool(os.getenv("HISTORY_ENABLED", "1"))
    log_level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()

    network, chain_id, default_rpc_url = resolve_network(network_env)

    chain_id_override = chain_id_env.strip() if chain_id_env and chain_id_env.strip() else None
    if chain_id_override:
        if not chain_id_override.isdigit():
            raise ValueError(f"CHAIN_ID must be numeric, got '{chain_id_env}'.")
        chain_id = chain_id_override

    rpc_url_override = rpc_url_env.strip().rstrip("/") if rpc_url_env and rpc_url_env.strip() else None
    rpc_url = rpc_url_override or default_rpc_url

    request_timeout: Optional[float] = None
    if timeout_env and timeout_env.strip():
        try:
            request_timeout = float(timeout_env)
        except ValueError as exc:
            raise ValueError(f"REQUEST_TIMEOUT must be a number, got '{timeout_env}'.") from exc
        if request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive.")

    return Config(
        network=network,
        chain_id=chain_id,
        rpc_url=rpc_url,
        rpc_url_override=rpc_url_override,
        chain_id_override=chain_id_override,
        request_timeout=request_timeout,
        scoring_variant=variant,
        history_path=os.path.expanduser(history_path),
        history_enabled=history_enabled,
        log_level=log_level,
    )
