"""All constants for the project"""

import os

from dotenv import load_dotenv

from vote_boost_toolkit.shared.exceptions import ConfigurationException

load_dotenv()


class BoostConstants:
    """Constants for the cross-chain gauge boost strategy"""

    # veSDT on Ethereum mainnet
    VE_SDT = "0x0C30476f66034E11782938DF8e4384970B6c9e8a"
    # veBoost delegation proxy for veSDT
    VE_PROXY_BOOST_SDT = "0xD67bdBefF01Fc492f1864E61756E5FBB3f173506"

    # Percentage of the gauge balance granted without any veSDT
    TOKENLESS_PRODUCTION = 40

    HOME_CHAIN_ID = 1
    HOME_BLOCKS_PER_DAY = 7200

    # Caps keep the number of multicalls bounded
    MAX_SAMPLES = 2
    MAX_WHITELISTED = 20

    BLOCK_FINDER_URL = os.getenv(
        "VB_BLOCK_FINDER_URL", "https://blockfinder.snapshot.org"
    )

    DECIMALS = 18


class GlobalConstants:
    """Global class constants for the project"""

    LATEST = "latest"

    CHAIN_ID_TO_RPC = {
        1: os.getenv("ETHEREUM_MAINNET_RPC_URL") or None,
        10: os.getenv("OPTIMISM_MAINNET_RPC_URL") or None,
        42161: os.getenv("ARBITRUM_MAINNET_RPC_URL") or None,
        8453: os.getenv("BASE_MAINNET_RPC_URL") or None,
        137: os.getenv("POLYGON_MAINNET_RPC_URL") or None,
        56: os.getenv("BSC_MAINNET_RPC_URL") or None,
        252: os.getenv("FRAXTAL_MAINNET_RPC_URL") or None,
    }

    @staticmethod
    def get_rpc_url(chain_id: int) -> str:
        """Get RPC URL for specified chain"""
        chain_id = int(chain_id)
        if chain_id not in GlobalConstants.CHAIN_ID_TO_RPC:
            raise ConfigurationException(f"Chain ID {chain_id} not supported")

        rpc_url = GlobalConstants.CHAIN_ID_TO_RPC[chain_id]
        if not rpc_url:
            raise ConfigurationException(
                f"RPC URL not set for chain {chain_id}"
            )

        return rpc_url
