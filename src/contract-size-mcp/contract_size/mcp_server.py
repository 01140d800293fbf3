"""
MCP server exposing contract bytecode size checks over JSON-RPC nodes.
"""

import argparse
import logging
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import load_config
from .service import ContractSizeService

server = FastMCP(
    name="contract-size-mcp",
    instructions="Check deployed contract bytecode size against the 100KB optimal range and 128KB limit.",
)

_service: Optional[ContractSizeService] = None


def _get_service() -> ContractSizeService:
    global _service
    if _service is None:
        cfg = load_config()
        _service = ContractSizeService(cfg)
    return _service


@server.tool(
    name="check_contract_size",
    title="Check Contract Size",
    description="Fetch deployed bytecode via eth_getCode and report size in KB, percentage of the 128KB limit, optimization score, band and recommendation. variant: A (percentage only) or B (default).",
)
def check_contract_size(
    address: str,
    network: Optional[str] = None,
    variant: Optional[str] = None,
) -> dict:
    """
    Score the deployed bytecode size of a contract address.
    """
    svc = _get_service()
    return svc.check_contract_size(address, network, variant)


@server.tool(
    name="list_history",
    title="List Size Check History",
    description="List the 10 most recent size checks, most recent first.",
)
def list_history() -> dict:
    svc = _get_service()
    return {"entries": svc.list_history()}


@server.tool(
    name="load_from_history",
    title="Load Size Check From History",
    description="Return the stored report for an address from history (case-insensitive).",
)
def load_from_history(address: str) -> dict:
    svc = _get_service()
    return svc.load_from_history(address)


@server.tool(
    name="clear_history",
    title="Clear Size Check History",
    description="Delete all stored size checks.",
)
def clear_history() -> dict:
    svc = _get_service()
    return svc.clear_history()


@server.tool(
    name="get_network_info",
    title="Get Network Info",
    description="Show the configured RPC endpoint and the chain id reported by the node.",
)
def get_network_info(network: Optional[str] = None) -> dict:
    svc = _get_service()
    return svc.get_network_info(network)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the contract size MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol for MCP.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--mount-path",
        default="/",
        help="Mount path for SSE transport (only when transport=sse).",
    )
    args = parser.parse_args()

    # stdio carries the protocol on stdout; logs go to stderr
    log_level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.WARNING))

    # FastMCP uses host/port only for SSE/HTTP transports; stdio ignores them.
    server.settings.host = args.host
    server.settings.port = args.port

    if args.transport == "sse":
        server.run(transport="sse", mount_path=args.mount_path)
    else:
        server.run(transport=args.transport)


if __name__ == "__main__":
    main()
