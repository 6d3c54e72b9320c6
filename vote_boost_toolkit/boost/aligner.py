"""Home chain block alignment for destination chain snapshots."""

import asyncio
from typing import Optional

from vote_boost_toolkit.shared.logging import get_logger
from vote_boost_toolkit.shared.services.block_finder_service import (
    BlockFinderService,
)
from vote_boost_toolkit.shared.services.web3_service import Web3Service

_logger = get_logger(__name__)


class BlockAligner:
    """
    Maps a destination chain block to the home chain block at the same time.

    Attributes:
        home_service: Web3Service of the home chain
        block_finder: Timestamp → block index
    """

    def __init__(
        self,
        home_service: Web3Service,
        block_finder: Optional[BlockFinderService] = None,
    ):
        self.home_service = home_service
        self.block_finder = block_finder or BlockFinderService()

    async def get_home_block(
        self,
        destination_service: Web3Service,
        destination_block: int,
        use_latest: bool = False,
    ) -> int:
        """
        Home chain block matching ``destination_block``.

        The destination block timestamp is always resolved through the block
        finder so a missing index entry fails the evaluation. When the
        snapshot was "latest" the home chain head is returned instead of the
        matched block.

        Raises:
            ExternalLookupException: provider or block finder failure
        """
        timestamp = await asyncio.to_thread(
            destination_service.get_block_timestamp, destination_block
        )
        home_block = await self.block_finder.get_block_at_timestamp(
            timestamp, self.home_service.chain_id
        )

        if use_latest:
            home_block = await asyncio.to_thread(self.home_service.get_block_number)

        _logger.debug(
            "Destination block %d (chain %d, ts %d) aligned to home block %d",
            destination_block,
            destination_service.chain_id,
            timestamp,
            home_block,
        )
        return home_block
