class ContractSizeError(Exception):
    """Base class for failures surfaced to the user by a size check."""


class ClientUnavailableError(ContractSizeError):
    """No RPC client could be built for the requested network."""


class InvalidAddressError(ContractSizeError, ValueError):
    """The address failed the length check (0x + 40 hex chars)."""


class NoContractError(ContractSizeError):
    """The node returned empty bytecode for the address."""


class ProviderError(ContractSizeError):
    """Any other failure raised by the bytecode provider."""


class InvalidVariantError(ContractSizeError, ValueError):
    """The requested scoring variant is neither A nor B."""
