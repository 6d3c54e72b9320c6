"""
Block finder service for mapping timestamps to block numbers.

Queries the Snapshot blockfinder GraphQL endpoint, which indexes block
timestamps for many networks, to find the block of a given chain that
matches a timestamp observed on another chain.
"""

from typing import Any, Dict, Optional

import httpx

from vote_boost_toolkit.shared.constants import BoostConstants
from vote_boost_toolkit.shared.exceptions import ExternalLookupException
from vote_boost_toolkit.shared.logging import get_logger
from vote_boost_toolkit.shared.services.http_client import get_async_client

_logger = get_logger(__name__)

BLOCKS_QUERY = """
query {
  blocks(where: { ts: %d, network_in: ["%s"] }) {
    number
  }
}
"""


class BlockFinderService:
    """Client for the blockfinder timestamp → block index."""

    def __init__(
        self,
        url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            url: GraphQL endpoint, defaults to BoostConstants.BLOCK_FINDER_URL
            client: httpx client to use instead of the shared one
        """
        self.url = url or BoostConstants.BLOCK_FINDER_URL
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_async_client()

    async def query(self, query: str) -> Dict[str, Any]:
        """
        Execute a GraphQL query and return its ``data`` payload.

        Raises:
            ExternalLookupException: on transport errors, non-200 answers
                or GraphQL errors
        """
        try:
            response = await self.client.post(self.url, json={"query": query})
        except httpx.RequestError as e:
            raise ExternalLookupException(
                f"Failed to reach block finder at {self.url}: {e}"
            ) from e

        if response.status_code != 200:
            raise ExternalLookupException(
                f"Block finder returned HTTP {response.status_code}: "
                f"{response.text[:200]}"
            )

        result: Dict[str, Any] = response.json()
        if result.get("errors"):
            raise ExternalLookupException(
                f"Block finder GraphQL errors: {result['errors']}"
            )

        return result.get("data") or {}

    async def get_block_at_timestamp(self, timestamp: int, chain_id: int) -> int:
        """
        Get the block of ``chain_id`` whose timestamp matches ``timestamp``.

        Raises:
            ExternalLookupException: when the index has no matching block
        """
        data = await self.query(BLOCKS_QUERY % (int(timestamp), str(chain_id)))
        blocks = data.get("blocks") or []
        if not blocks or blocks[0].get("number") is None:
            raise ExternalLookupException(
                f"No block found on chain {chain_id} for timestamp {timestamp}"
            )

        number = int(blocks[0]["number"])
        _logger.debug(
            "Timestamp %d maps to block %d on chain %s",
            timestamp,
            number,
            chain_id,
        )
        return number
