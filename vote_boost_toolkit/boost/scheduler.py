"""Sample block scheduling for time-weighted averages."""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

from vote_boost_toolkit.shared.exceptions import ConfigurationException


def get_previous_blocks(
    current_block_number: int,
    number_of_blocks: int,
    days_interval: float,
    blocks_per_day: int,
) -> List[int]:
    """
    Evenly spaced blocks covering ``days_interval`` days up to the current block.

    The last block is always ``current_block_number``. With a single sample
    no window is applied.

    Example:
        >>> get_previous_blocks(1_000_000, 2, 7, 7200)
        [949600, 1000000]
    """
    if number_of_blocks < 1:
        raise ConfigurationException(
            f"number of blocks must be at least 1, got {number_of_blocks}"
        )
    if number_of_blocks == 1:
        return [int(current_block_number)]

    total_blocks_interval = Decimal(blocks_per_day) * Decimal(str(days_interval))
    block_interval = total_blocks_interval / (number_of_blocks - 1)

    block_numbers = []
    for i in range(number_of_blocks):
        block_number = (
            Decimal(current_block_number) - total_blocks_interval + block_interval * i
        )
        block_numbers.append(
            int(block_number.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        )

    return block_numbers
