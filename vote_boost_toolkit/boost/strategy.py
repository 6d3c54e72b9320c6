"""
Cross-chain sdToken gauge voting power with veSDT boost.

Voting power is the time-weighted average of a gauge depositor's working
balance, where the working balance follows the liquidity gauge boost
formula: 40% of the gauge balance for free, plus a bonus proportional to
the depositor's share of veSDT (read on Ethereum through the veBoost proxy),
capped at the gauge balance.

Note: the veSDT and gauge total supplies are only read at the most recent
sample and are applied to every historical sample.
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from eth_utils import to_checksum_address
from web3 import Web3

from vote_boost_toolkit.boost.aligner import BlockAligner
from vote_boost_toolkit.boost.calculator import average, from_raw, working_balance
from vote_boost_toolkit.boost.fetcher import BalanceFetcher
from vote_boost_toolkit.boost.models import (
    AddressWeight,
    BlockSchedule,
    SampleSet,
    SamplingOptions,
    SnapshotReference,
    resolve_snapshot,
)
from vote_boost_toolkit.boost.scheduler import get_previous_blocks
from vote_boost_toolkit.shared.constants import BoostConstants
from vote_boost_toolkit.shared.logging import get_logger
from vote_boost_toolkit.shared.services.block_finder_service import (
    BlockFinderService,
)
from vote_boost_toolkit.shared.services.web3_service import Web3Service

_logger = get_logger(__name__)

author = "pierremarsotlyon1"
version = "0.0.1"

Provider = Union[Web3, Web3Service]


def _as_service(chain_id: int, provider: Provider) -> Web3Service:
    if isinstance(provider, Web3Service):
        return provider
    return Web3Service.from_web3(chain_id, provider)


class BoostStrategy:
    """
    Strategy evaluator with its collaborators and contract addresses injected.

    Attributes:
        home_service: Web3Service of the home chain, resolved lazily
        block_finder: Timestamp → block index
        ve_address: Vote-escrow token on the home chain
        boost_proxy_address: veBoost proxy on the home chain
        home_chain_id: Chain id of the home chain
    """

    def __init__(
        self,
        home_service: Optional[Provider] = None,
        block_finder: Optional[BlockFinderService] = None,
        ve_address: str = BoostConstants.VE_SDT,
        boost_proxy_address: str = BoostConstants.VE_PROXY_BOOST_SDT,
        home_chain_id: int = BoostConstants.HOME_CHAIN_ID,
    ):
        self.home_chain_id = home_chain_id
        self._home_service = (
            _as_service(home_chain_id, home_service)
            if home_service is not None
            else None
        )
        self.block_finder = block_finder or BlockFinderService()
        self.ve_address = ve_address
        self.boost_proxy_address = boost_proxy_address

    @property
    def home_service(self) -> Web3Service:
        if self._home_service is None:
            self._home_service = Web3Service.get_instance(self.home_chain_id)
        return self._home_service

    async def build_schedule(
        self,
        destination_service: Web3Service,
        options: SamplingOptions,
        snapshot: Optional[SnapshotReference],
    ) -> BlockSchedule:
        """Resolve the snapshot on both chains and lay out the sample blocks."""
        explicit_block = resolve_snapshot(snapshot)
        use_latest = explicit_block is None
        destination_block = (
            await asyncio.to_thread(destination_service.get_block_number)
            if use_latest
            else explicit_block
        )

        aligner = BlockAligner(self.home_service, self.block_finder)
        home_block = await aligner.get_home_block(
            destination_service, destination_block, use_latest=use_latest
        )

        schedule = BlockSchedule(
            home_blocks=get_previous_blocks(
                home_block,
                options.number_of_samples,
                options.days_interval,
                options.home_blocks_per_day,
            ),
            destination_blocks=get_previous_blocks(
                destination_block,
                options.number_of_samples,
                options.days_interval,
                options.destination_blocks_per_day,
            ),
        )
        _logger.debug(
            "Sample blocks: home %s, destination %s",
            schedule.home_blocks,
            schedule.destination_blocks,
        )
        return schedule

    @staticmethod
    def compute_weights(
        addresses: Sequence[str],
        samples: SampleSet,
        options: SamplingOptions,
    ) -> List[AddressWeight]:
        """Working balance per sample and final weight for every address."""
        weights = []
        for address in addresses:
            key = address.lower()
            balances = [
                working_balance(
                    from_raw(samples.destination_rows[j].balances[key]),
                    from_raw(samples.home_rows[j].balances[key]),
                    samples.ve_total_supply,
                    samples.gauge_total_supply,
                )
                for j in range(len(samples))
            ]
            weights.append(
                AddressWeight(
                    address=to_checksum_address(key),
                    working_balances=balances,
                    weight=average(
                        balances, key, options.whitelisted_addresses
                    ),
                    whitelisted=options.is_whitelisted(key),
                )
            )
        return weights

    async def evaluate(
        self,
        network: Union[int, str],
        provider: Provider,
        addresses: Sequence[str],
        options: Union[SamplingOptions, Mapping[str, Any]],
        snapshot: Optional[SnapshotReference] = "latest",
    ) -> List[AddressWeight]:
        """
        Full evaluation with per-address breakdown.

        Raises:
            ConfigurationException: invalid options, before any network call
            ExternalLookupException: block or block finder lookup failure
            BatchReadException: multicall failure on either chain
        """
        if not isinstance(options, SamplingOptions):
            options = SamplingOptions.from_dict(options)
        resolve_snapshot(snapshot)

        # Deduplicated, lower-cased, input order kept
        addresses = list(dict.fromkeys(a.lower() for a in addresses))

        destination_service = _as_service(int(network), provider)
        schedule = await self.build_schedule(
            destination_service, options, snapshot
        )

        fetcher = BalanceFetcher(
            self.home_service,
            destination_service,
            options.gauge_address,
            ve_address=self.ve_address,
            boost_proxy_address=self.boost_proxy_address,
        )
        samples = await fetcher.fetch_all(addresses, schedule)

        weights = self.compute_weights(addresses, samples, options)
        _logger.info(
            "Computed voting power for %d addresses on chain %s "
            "(home block %d, destination block %d)",
            len(weights),
            network,
            schedule.home_blocks[-1],
            schedule.destination_blocks[-1],
        )
        return weights

    async def __call__(
        self,
        space: str,
        network: Union[int, str],
        provider: Provider,
        addresses: Sequence[str],
        options: Union[SamplingOptions, Mapping[str, Any]],
        snapshot: Optional[SnapshotReference] = "latest",
    ) -> Dict[str, float]:
        weights = await self.evaluate(
            network, provider, addresses, options, snapshot
        )
        return {w.address: float(w.weight) for w in weights}


async def strategy(
    space: str,
    network: Union[int, str],
    provider: Provider,
    addresses: Sequence[str],
    options: Union[SamplingOptions, Mapping[str, Any]],
    snapshot: Optional[SnapshotReference] = "latest",
) -> Dict[str, float]:
    """
    Voting power of ``addresses`` for a Snapshot space.

    Args:
        space: Snapshot space id, unused by the computation
        network: Destination chain id
        provider: Web3 instance (or Web3Service) of the destination chain
        addresses: Voter addresses, any case
        options: SamplingOptions or a Snapshot options bag
        snapshot: Destination chain block number or "latest"

    Returns:
        Dict[str, float]: checksummed address → voting power
    """
    return await BoostStrategy()(
        space, network, provider, addresses, options, snapshot
    )
