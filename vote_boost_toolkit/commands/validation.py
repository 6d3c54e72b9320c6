from eth_utils import is_address, to_checksum_address


def validate_eth_address(address: str, param_name: str = "address") -> str:
    """Validate and return checksum ethereum address"""
    if not address or not isinstance(address, str):
        raise ValueError(
            f"Invalid {param_name}: address must be a non-empty string"
        )
    if not is_address(address):
        raise ValueError(
            f"Invalid {param_name}: {address} is not a valid Ethereum address"
        )
    return to_checksum_address(address)


def validate_address_list(value: str, param_name: str = "addresses") -> list:
    """Validate a comma-separated list of addresses"""
    if not value:
        return []
    return [
        validate_eth_address(item.strip(), param_name)
        for item in value.split(",")
        if item.strip()
    ]


def validate_chain_id(chain_id: int) -> None:
    """Validate chain ID"""
    valid_chain_ids = {1, 10, 137, 8453, 42161, 56, 252}  # Ethereum, Optimism, Polygon, Base, Arbitrum, BSC, Fraxtal
    if chain_id not in valid_chain_ids:
        raise ValueError(
            f"Invalid chain_id: {chain_id}. Must be one of {valid_chain_ids}"
        )


def validate_snapshot(value: str):
    """Validate a block number or the 'latest' tag"""
    if value == "latest":
        return value
    try:
        block = int(value)
    except ValueError:
        raise ValueError(
            f"Invalid block: {value}. Must be a block number or 'latest'"
        )
    if block <= 0:
        raise ValueError(f"Invalid block: {value}. Must be positive")
    return block
