"""Vote Boost Toolkit - cross-chain sdToken gauge voting power with veSDT boost."""

__version__ = "0.1.0"

from .boost import BoostStrategy, SamplingOptions, strategy

__all__ = ["BoostStrategy", "SamplingOptions", "strategy"]
