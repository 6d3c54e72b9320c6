"""
Type definitions for the cross-chain boost strategy.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from eth_utils import is_address

from vote_boost_toolkit.shared.constants import BoostConstants, GlobalConstants
from vote_boost_toolkit.shared.exceptions import ConfigurationException

# Either an explicit destination-chain block or "latest"
SnapshotReference = Union[int, str]

# =============================================================================
# OPTIONS
# =============================================================================


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any, name: str) -> int:
    """Integer option value; 2, 2.0 and "2" are accepted, 2.9 is not."""
    if _is_int(value):
        return value
    if isinstance(value, bool):
        raise ConfigurationException(f"{name} must be an integer, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationException(
            f"{name} must be an integer, got {value!r}"
        ) from e
    if not math.isfinite(number) or not number.is_integer():
        raise ConfigurationException(f"{name} must be an integer, got {value!r}")
    return int(number)


@dataclass(frozen=True)
class SamplingOptions:
    """
    Strategy options, validated once before any network activity.

    Attributes:
        number_of_samples: Blocks sampled per chain (1 or 2)
        days_interval: Lookback window in days
        destination_blocks_per_day: Block cadence of the destination chain
        gauge_address: sdToken gauge on the destination chain
        whitelisted_addresses: Addresses read at the latest sample only
        home_blocks_per_day: Block cadence of the home chain
    """

    number_of_samples: int
    days_interval: float
    destination_blocks_per_day: int
    gauge_address: str
    whitelisted_addresses: Tuple[str, ...] = ()
    home_blocks_per_day: int = BoostConstants.HOME_BLOCKS_PER_DAY

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationException when an option is out of bounds."""
        if not _is_int(self.number_of_samples):
            raise ConfigurationException(
                f"number of samples must be an integer, got {self.number_of_samples!r}"
            )
        if self.number_of_samples > BoostConstants.MAX_SAMPLES:
            raise ConfigurationException(
                f"maximum of {BoostConstants.MAX_SAMPLES} calls"
            )
        if len(self.whitelisted_addresses) > BoostConstants.MAX_WHITELISTED:
            raise ConfigurationException(
                f"maximum of {BoostConstants.MAX_WHITELISTED} whitelisted address"
            )
        if self.number_of_samples < 1:
            raise ConfigurationException(
                f"number of samples must be at least 1, got {self.number_of_samples}"
            )
        if (
            isinstance(self.days_interval, bool)
            or not isinstance(self.days_interval, (int, float))
            or not math.isfinite(self.days_interval)
            or self.days_interval <= 0
        ):
            raise ConfigurationException(
                f"days interval must be a positive finite number, got {self.days_interval!r}"
            )
        for name in ("destination_blocks_per_day", "home_blocks_per_day"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise ConfigurationException(
                    f"{name} must be a positive integer, got {value!r}"
                )
        if not is_address(self.gauge_address):
            raise ConfigurationException(
                f"Invalid gauge address: {self.gauge_address}"
            )
        for address in self.whitelisted_addresses:
            if not is_address(address):
                raise ConfigurationException(
                    f"Invalid whitelisted address: {address}"
                )

    def is_whitelisted(self, address: str) -> bool:
        return address.lower() in {a.lower() for a in self.whitelisted_addresses}

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "SamplingOptions":
        """
        Build options from a Snapshot strategy options bag.

        Expected keys: ``twavpNumberOfBlocks``, ``twavpDaysInterval``,
        ``blocksPerDay``, ``sdTokenGauge``, ``whiteListedAddress`` and the
        optional ``homeBlocksPerDay``.
        """
        try:
            number_of_samples = _as_int(
                options["twavpNumberOfBlocks"], "twavpNumberOfBlocks"
            )
            days_interval = float(options["twavpDaysInterval"])
            blocks_per_day = _as_int(options["blocksPerDay"], "blocksPerDay")
            gauge_address = str(options["sdTokenGauge"])
            home_blocks_per_day = _as_int(
                options.get(
                    "homeBlocksPerDay", BoostConstants.HOME_BLOCKS_PER_DAY
                ),
                "homeBlocksPerDay",
            )
        except KeyError as e:
            raise ConfigurationException(f"Missing option: {e.args[0]}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationException(f"Invalid option value: {e}") from e

        whitelisted = options.get("whiteListedAddress") or []
        if isinstance(whitelisted, str):
            raise ConfigurationException(
                "whiteListedAddress must be a list of addresses"
            )

        return cls(
            number_of_samples=number_of_samples,
            days_interval=days_interval,
            destination_blocks_per_day=blocks_per_day,
            gauge_address=gauge_address,
            whitelisted_addresses=tuple(whitelisted),
            home_blocks_per_day=home_blocks_per_day,
        )


def resolve_snapshot(snapshot: Optional[SnapshotReference]) -> Optional[int]:
    """Return the explicit block of a snapshot reference, None for latest."""
    if snapshot is None or snapshot == GlobalConstants.LATEST:
        return None
    if isinstance(snapshot, bool):
        raise ConfigurationException(f"Invalid snapshot: {snapshot!r}")
    try:
        block = int(snapshot)
    except (TypeError, ValueError) as e:
        raise ConfigurationException(f"Invalid snapshot: {snapshot!r}") from e
    if block < 0:
        raise ConfigurationException(f"Invalid snapshot: {snapshot!r}")
    return block


# =============================================================================
# SAMPLES
# =============================================================================


@dataclass(frozen=True)
class SampleRow:
    """
    Raw batched-read result of one chain at one sample index.

    ``balances`` maps lower-cased addresses to 18-decimal raw values.
    ``total_supply`` is only read on the final sample index.
    """

    block_number: int
    balances: Dict[str, int]
    total_supply: Optional[int] = None


@dataclass(frozen=True)
class BlockSchedule:
    """Matching sample blocks on the home and destination chains."""

    home_blocks: List[int]
    destination_blocks: List[int]

    def __post_init__(self):
        if len(self.home_blocks) != len(self.destination_blocks):
            raise ValueError(
                "home and destination schedules must have the same length"
            )

    def __len__(self) -> int:
        return len(self.home_blocks)


@dataclass(frozen=True)
class SampleSet:
    """All rows fetched for one evaluation, indexed by sample."""

    home_rows: List[SampleRow]
    destination_rows: List[SampleRow]
    ve_total_supply: Decimal = Decimal(0)
    gauge_total_supply: Decimal = Decimal(0)

    def __len__(self) -> int:
        return len(self.home_rows)


@dataclass
class AddressWeight:
    """Per-address breakdown, used by the CLI output."""

    address: str
    working_balances: List[Decimal] = field(default_factory=list)
    weight: Decimal = Decimal(0)
    whitelisted: bool = False
