from vote_boost_toolkit.boost.aligner import BlockAligner
from vote_boost_toolkit.boost.calculator import average, working_balance
from vote_boost_toolkit.boost.fetcher import BalanceFetcher
from vote_boost_toolkit.boost.models import (
    AddressWeight,
    BlockSchedule,
    SampleRow,
    SampleSet,
    SamplingOptions,
)
from vote_boost_toolkit.boost.scheduler import get_previous_blocks
from vote_boost_toolkit.boost.strategy import BoostStrategy, strategy

__all__ = [
    "AddressWeight",
    "BalanceFetcher",
    "BlockAligner",
    "BlockSchedule",
    "BoostStrategy",
    "SampleRow",
    "SampleSet",
    "SamplingOptions",
    "average",
    "get_previous_blocks",
    "strategy",
    "working_balance",
]
