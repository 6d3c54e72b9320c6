"""
Web3 Service module for reading chain heads and block timestamps.

This module provides a Web3Service class that manages one connection per
chain and exposes the two provider reads the strategy needs: the current
block number and the timestamp of a given block.
"""

from typing import Any, Dict, Optional

from web3 import Web3

from vote_boost_toolkit.shared.constants import GlobalConstants
from vote_boost_toolkit.shared.exceptions import ExternalLookupException


class Web3Service:
    """
    A service class for managing Web3 connections and block lookups.

    Instances are either built from an RPC URL or wrapped around an
    existing Web3 object handed over by the caller.
    """

    _instances: Dict[int, "Web3Service"] = {}

    def __init__(
        self,
        chain_id: int,
        rpc_url: Optional[str] = None,
        w3: Optional[Web3] = None,
    ):
        """
        Initialize the Web3Service.

        Args:
            chain_id (int): The chain ID to use.
            rpc_url (str): The RPC URL to use when no Web3 instance is given.
            w3 (Web3): An already configured Web3 instance.
        """
        self.chain_id = int(chain_id)
        if w3 is None:
            if rpc_url is None:
                rpc_url = GlobalConstants.get_rpc_url(self.chain_id)
            w3 = self._initialize_web3(rpc_url)
        self.w3 = w3
        self._block_cache: Dict[int, Any] = {}

    def _initialize_web3(self, rpc_url: str) -> Web3:
        """Initialize Web3 instance with middleware if needed"""
        w3 = Web3(Web3.HTTPProvider(rpc_url))

        # POA extraData handling for non-mainnet chains
        if self.chain_id != 1:
            try:
                from web3.middleware import (
                    ExtraDataToPOAMiddleware as poa_middleware,
                )
            except ImportError:  # web3 < 7
                from web3.middleware import (
                    geth_poa_middleware as poa_middleware,
                )

            w3.middleware_onion.inject(poa_middleware, layer=0)

        return w3

    @classmethod
    def get_instance(cls, chain_id: int) -> "Web3Service":
        """Get or create a Web3Service instance for a specific chain"""
        chain_id = int(chain_id)
        if chain_id not in cls._instances:
            cls._instances[chain_id] = cls(chain_id)
        return cls._instances[chain_id]

    @classmethod
    def from_web3(cls, chain_id: int, w3: Web3) -> "Web3Service":
        """Wrap a caller-provided Web3 instance"""
        return cls(chain_id, w3=w3)

    def get_block_number(self) -> int:
        """Get the current chain head"""
        try:
            return int(self.w3.eth.block_number)
        except Exception as e:
            raise ExternalLookupException(
                f"Failed to get block number on chain {self.chain_id}: {e}"
            ) from e

    def get_block(self, block_identifier: int) -> Dict[str, Any]:
        """Get block information for a specific block number"""
        if block_identifier not in self._block_cache:
            try:
                block = self.w3.eth.get_block(block_identifier)
            except Exception as e:
                raise ExternalLookupException(
                    f"Failed to get block {block_identifier} on chain "
                    f"{self.chain_id}: {e}"
                ) from e
            if block is None:
                raise ExternalLookupException(
                    f"Block {block_identifier} not found on chain "
                    f"{self.chain_id}"
                )
            self._block_cache[block_identifier] = block
        return self._block_cache[block_identifier]

    def get_block_timestamp(self, block_identifier: int) -> int:
        """Get the timestamp of a specific block"""
        return int(self.get_block(block_identifier)["timestamp"])
