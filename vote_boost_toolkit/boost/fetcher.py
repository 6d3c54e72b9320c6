"""
Batched balance reads on the home and destination chains.

Each sample index issues one multicall per chain at that chain's sample
block. The final index also reads the veSDT and gauge total supplies in the
same batch, and those totals are reused for every sample.
"""

import asyncio
from typing import Any, List, Optional, Sequence, Tuple

from eth_utils import to_checksum_address
from w3multicall.multicall import W3Multicall

from vote_boost_toolkit.boost.calculator import from_raw
from vote_boost_toolkit.boost.models import BlockSchedule, SampleRow, SampleSet
from vote_boost_toolkit.shared.constants import BoostConstants
from vote_boost_toolkit.shared.exceptions import BatchReadException
from vote_boost_toolkit.shared.logging import get_logger
from vote_boost_toolkit.shared.services.web3_service import Web3Service

_logger = get_logger(__name__)

ADJUSTED_BALANCE_OF = "adjusted_balance_of(address)(uint256)"
BALANCE_OF = "balanceOf(address)(uint256)"
TOTAL_SUPPLY = "totalSupply()(uint256)"


class BalanceFetcher:
    """
    Reads boost proxy and gauge balances for a set of addresses.

    Attributes:
        home_service: Web3Service of the chain holding veSDT
        destination_service: Web3Service of the chain holding the gauge
        gauge_address: sdToken gauge on the destination chain
        ve_address: Vote-escrow token on the home chain
        boost_proxy_address: veBoost proxy exposing adjusted_balance_of
    """

    def __init__(
        self,
        home_service: Web3Service,
        destination_service: Web3Service,
        gauge_address: str,
        ve_address: str = BoostConstants.VE_SDT,
        boost_proxy_address: str = BoostConstants.VE_PROXY_BOOST_SDT,
    ):
        self.home_service = home_service
        self.destination_service = destination_service
        self.gauge_address = to_checksum_address(gauge_address)
        self.ve_address = to_checksum_address(ve_address)
        self.boost_proxy_address = to_checksum_address(boost_proxy_address)

    def _build_multicall(
        self,
        service: Web3Service,
        target: str,
        signature: str,
        addresses: Sequence[str],
        total_supply_target: Optional[str] = None,
    ) -> W3Multicall:
        multicall = W3Multicall(service.w3)
        for address in addresses:
            multicall.add(
                W3Multicall.Call(
                    target, signature, [to_checksum_address(address)]
                )
            )
        if total_supply_target is not None:
            multicall.add(W3Multicall.Call(total_supply_target, TOTAL_SUPPLY, []))
        return multicall

    def _execute(
        self,
        service: Web3Service,
        multicall: W3Multicall,
        block_number: int,
        expected: int,
    ) -> List[Any]:
        try:
            results = multicall.call(block_number)
        except Exception as e:
            raise BatchReadException(
                f"Multicall failed on chain {service.chain_id} at block "
                f"{block_number}: {e}"
            ) from e

        if results is None or len(results) != expected:
            raise BatchReadException(
                f"Multicall on chain {service.chain_id} at block {block_number} "
                f"returned {0 if results is None else len(results)} results, "
                f"expected {expected}"
            )
        undecoded = [i for i, value in enumerate(results) if value is None]
        if undecoded:
            # Empty return data, e.g. a contract not yet deployed at this block
            raise BatchReadException(
                f"Multicall on chain {service.chain_id} at block {block_number} "
                f"could not decode calls {undecoded}"
            )
        return list(results)

    def _to_row(
        self,
        results: List[Any],
        addresses: Sequence[str],
        block_number: int,
        with_total: bool,
    ) -> SampleRow:
        total_supply = int(results.pop()) if with_total else None
        balances = {
            address.lower(): int(value)
            for address, value in zip(addresses, results)
        }
        return SampleRow(
            block_number=block_number,
            balances=balances,
            total_supply=total_supply,
        )

    def read_home(
        self, addresses: Sequence[str], block_number: int, is_end: bool
    ) -> SampleRow:
        """Adjusted veSDT balances (and veSDT supply on the final sample)."""
        multicall = self._build_multicall(
            self.home_service,
            self.boost_proxy_address,
            ADJUSTED_BALANCE_OF,
            addresses,
            self.ve_address if is_end else None,
        )
        results = self._execute(
            self.home_service,
            multicall,
            block_number,
            len(addresses) + (1 if is_end else 0),
        )
        return self._to_row(results, addresses, block_number, is_end)

    def read_destination(
        self, addresses: Sequence[str], block_number: int, is_end: bool
    ) -> SampleRow:
        """Gauge balances (and gauge supply on the final sample)."""
        multicall = self._build_multicall(
            self.destination_service,
            self.gauge_address,
            BALANCE_OF,
            addresses,
            self.gauge_address if is_end else None,
        )
        results = self._execute(
            self.destination_service,
            multicall,
            block_number,
            len(addresses) + (1 if is_end else 0),
        )
        return self._to_row(results, addresses, block_number, is_end)

    async def fetch_sample(
        self,
        addresses: Sequence[str],
        home_block: int,
        destination_block: int,
        is_end: bool,
    ) -> Tuple[SampleRow, SampleRow]:
        """Read both chains for one sample index concurrently."""
        home_row, destination_row = await asyncio.gather(
            asyncio.to_thread(self.read_home, addresses, home_block, is_end),
            asyncio.to_thread(
                self.read_destination, addresses, destination_block, is_end
            ),
        )
        return home_row, destination_row

    async def fetch_all(
        self, addresses: Sequence[str], schedule: BlockSchedule
    ) -> SampleSet:
        """
        Read every sample of ``schedule``.

        Raises:
            BatchReadException: if any batch fails, no partial set is returned
        """
        home_rows: List[SampleRow] = []
        destination_rows: List[SampleRow] = []
        last_index = len(schedule) - 1

        for i in range(len(schedule)):
            home_row, destination_row = await self.fetch_sample(
                addresses,
                schedule.home_blocks[i],
                schedule.destination_blocks[i],
                is_end=i == last_index,
            )
            home_rows.append(home_row)
            destination_rows.append(destination_row)
            _logger.debug(
                "Sample %d read: home block %d, destination block %d, %d addresses",
                i,
                home_row.block_number,
                destination_row.block_number,
                len(addresses),
            )

        return SampleSet(
            home_rows=home_rows,
            destination_rows=destination_rows,
            ve_total_supply=from_raw(home_rows[-1].total_supply),
            gauge_total_supply=from_raw(destination_rows[-1].total_supply),
        )
