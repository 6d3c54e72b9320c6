"""
Pytest configuration and shared fixtures.

This module provides in-memory stand-ins for the chain collaborators: a
fake Web3 object per chain and a fake multicall that answers from a
per-block state table.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, patch

import pytest
from eth_utils import to_checksum_address

UNIT = 10**18

VE_SDT = "0x0C30476f66034E11782938DF8e4384970B6c9e8a"
VE_PROXY_BOOST_SDT = "0xD67bdBefF01Fc492f1864E61756E5FBB3f173506"


class FakeChain:
    """Minimal Web3 stand-in: head, block timestamps and contract state."""

    def __init__(self, head: int, timestamps: Optional[Dict[int, int]] = None):
        self.state: Dict[int, Dict[Tuple[str, str, Tuple[str, ...]], int]] = {}
        self.reads: List[Tuple[int, int]] = []
        self.timestamps = timestamps or {}
        self.eth = SimpleNamespace(
            block_number=head,
            get_block=lambda n: {"number": n, "timestamp": self.timestamps[n]},
        )

    def set(
        self,
        block: int,
        target: str,
        signature: str,
        args: Tuple[str, ...],
        value: int,
    ) -> None:
        key = (target.lower(), signature, tuple(a.lower() for a in args))
        self.state.setdefault(block, {})[key] = value


class FakeMulticall:
    """Stand-in for w3multicall.multicall.W3Multicall."""

    class Call:
        def __init__(self, to: str, signature: str, args: Any = None):
            self.to = to
            self.signature = signature
            self.args = list(args or [])

    def __init__(self, w3: FakeChain):
        self.w3 = w3
        self.calls: List["FakeMulticall.Call"] = []

    def add(self, call: "FakeMulticall.Call") -> None:
        self.calls.append(call)

    def call(self, block_identifier: Any = None) -> List[int]:
        self.w3.reads.append((block_identifier, len(self.calls)))
        if block_identifier not in self.w3.state:
            raise Exception(f"execution reverted at block {block_identifier}")
        block_state = self.w3.state[block_identifier]
        return [
            block_state.get(
                (
                    call.to.lower(),
                    call.signature,
                    tuple(str(a).lower() for a in call.args),
                ),
                0,
            )
            for call in self.calls
        ]


@pytest.fixture
def fake_multicall():
    """Patch the multicall used by the balance fetcher."""
    with patch("vote_boost_toolkit.boost.fetcher.W3Multicall", FakeMulticall):
        yield FakeMulticall


@pytest.fixture
def sample_timestamp() -> int:
    """Sample block timestamp for tests."""
    return 1764806400


@pytest.fixture
def home_chain() -> FakeChain:
    """Ethereum mainnet stand-in."""
    return FakeChain(head=20_000_050)


@pytest.fixture
def destination_chain(sample_timestamp) -> FakeChain:
    """Destination chain stand-in, block 1_000_000 is the chain head."""
    return FakeChain(
        head=1_000_000,
        timestamps={1_000_000: sample_timestamp},
    )


@pytest.fixture
def block_finder():
    """Block finder mapping every timestamp to home block 20_000_000."""
    finder = AsyncMock()
    finder.get_block_at_timestamp.return_value = 20_000_000
    return finder


@pytest.fixture
def sample_gauge_address() -> str:
    """Sample gauge address for tests."""
    return "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5"


@pytest.fixture
def sample_user_address() -> str:
    """Sample user address for tests."""
    return "0x52f541764E6e90eeBc5c21Ff570De0e2D63766B6"


@pytest.fixture
def sample_other_address() -> str:
    """Second voter address for tests."""
    return to_checksum_address("0x000000073d065fc33a3050c2d4a8e82ee5c5c25a")


@pytest.fixture
def sample_options(sample_gauge_address) -> Dict[str, Any]:
    """Snapshot options bag with two samples over one week."""
    return {
        "twavpNumberOfBlocks": 2,
        "twavpDaysInterval": 7,
        "blocksPerDay": 7200,
        "sdTokenGauge": sample_gauge_address,
        "whiteListedAddress": [],
    }


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
