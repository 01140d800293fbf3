import os

import pytest

from contract_size.config import Config, load_config, normalize_variant, resolve_network

ENV_VARS = (
    "NETWORK",
    "RPC_URL",
    "CHAIN_ID",
    "REQUEST_TIMEOUT",
    "SCORING_VARIANT",
    "HISTORY_PATH",
    "HISTORY_ENABLED",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.network == "monad-testnet"
    assert cfg.chain_id == "10143"
    assert cfg.rpc_url == "https://testnet-rpc.monad.xyz"
    assert cfg.request_timeout is None
    assert cfg.scoring_variant == "B"
    assert cfg.history_enabled is True
    assert cfg.history_path == os.path.expanduser(os.path.join("~", ".contract-size", "history.json"))


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("NETWORK", "eth")
    monkeypatch.setenv("RPC_URL", "http://localhost:8545/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("SCORING_VARIANT", "a")
    monkeypatch.setenv("HISTORY_PATH", str(tmp_path / "h.json"))
    monkeypatch.setenv("HISTORY_ENABLED", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = load_config()
    assert cfg.network == "mainnet"
    assert cfg.chain_id == "1"
    assert cfg.rpc_url == "http://localhost:8545"
    assert cfg.rpc_url_override == "http://localhost:8545"
    assert cfg.request_timeout == 2.5
    assert cfg.scoring_variant == "A"
    assert cfg.history_path == str(tmp_path / "h.json")
    assert cfg.history_enabled is False
    assert cfg.log_level == "DEBUG"


def test_numeric_network_needs_rpc_url(monkeypatch):
    monkeypatch.setenv("NETWORK", "31337")
    cfg = load_config()
    assert cfg.chain_id == "31337"
    assert cfg.rpc_url is None

    monkeypatch.setenv("RPC_URL", "http://127.0.0.1:8545")
    assert load_config().rpc_url == "http://127.0.0.1:8545"


def test_chain_id_override(monkeypatch):
    monkeypatch.setenv("CHAIN_ID", "20143")
    cfg = load_config()
    assert cfg.chain_id == "20143"
    assert cfg.chain_id_override == "20143"


@pytest.mark.parametrize(
    "name, value",
    [
        ("CHAIN_ID", "abc"),
        ("REQUEST_TIMEOUT", "soon"),
        ("REQUEST_TIMEOUT", "0"),
        ("SCORING_VARIANT", "Z"),
        ("NETWORK", "atlantis"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_config()


def test_resolve_network():
    assert resolve_network("Monad") == ("monad-testnet", "10143", "https://testnet-rpc.monad.xyz")
    assert resolve_network("11155111")[0] == "sepolia"
    assert resolve_network("8453") == ("8453", "8453", None)
    with pytest.raises(ValueError):
        resolve_network("")


def test_normalize_variant():
    assert normalize_variant(None) == "B"
    assert normalize_variant(" a ") == "A"
    with pytest.raises(ValueError):
        normalize_variant("AB")


def test_config_default_history_path_is_expanded():
    assert "~" not in Config().history_path
    assert Config().history_path == os.path.expanduser(os.path.join("~", ".contract-size", "history.json"))
