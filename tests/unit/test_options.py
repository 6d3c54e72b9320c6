"""
Unit tests for strategy option parsing and boundary validation.
"""

import pytest

from vote_boost_toolkit.boost.models import (
    BlockSchedule,
    SamplingOptions,
    resolve_snapshot,
)
from vote_boost_toolkit.shared.exceptions import (
    ConfigurationException,
    NonRetryableException,
)

GAUGE = "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5"


def _address(i: int) -> str:
    return "0x" + f"{i + 1:040x}"


class TestSamplingOptionsFromDict:
    """Tests for building options from a Snapshot options bag."""

    def test_parses_snapshot_keys(self, sample_options):
        options = SamplingOptions.from_dict(sample_options)

        assert options.number_of_samples == 2
        assert options.days_interval == 7
        assert options.destination_blocks_per_day == 7200
        assert options.gauge_address == GAUGE
        assert options.whitelisted_addresses == ()
        assert options.home_blocks_per_day == 7200

    def test_home_blocks_per_day_override(self, sample_options):
        sample_options["homeBlocksPerDay"] = 7000

        options = SamplingOptions.from_dict(sample_options)

        assert options.home_blocks_per_day == 7000

    def test_missing_key(self, sample_options):
        del sample_options["sdTokenGauge"]

        with pytest.raises(ConfigurationException, match="sdTokenGauge"):
            SamplingOptions.from_dict(sample_options)

    def test_non_numeric_value(self, sample_options):
        sample_options["blocksPerDay"] = "many"

        with pytest.raises(ConfigurationException):
            SamplingOptions.from_dict(sample_options)

    def test_whitelist_must_be_a_list(self, sample_options):
        sample_options["whiteListedAddress"] = GAUGE

        with pytest.raises(ConfigurationException):
            SamplingOptions.from_dict(sample_options)


class TestSamplingOptionsLimits:
    """Protocol caps on sample count and whitelist size."""

    def test_three_samples_rejected(self, sample_options):
        sample_options["twavpNumberOfBlocks"] = 3

        with pytest.raises(ConfigurationException, match="maximum of 2 calls"):
            SamplingOptions.from_dict(sample_options)

    def test_twenty_one_whitelisted_rejected(self, sample_options):
        sample_options["whiteListedAddress"] = [_address(i) for i in range(21)]

        with pytest.raises(
            ConfigurationException, match="maximum of 20 whitelisted address"
        ):
            SamplingOptions.from_dict(sample_options)

    def test_twenty_whitelisted_accepted(self, sample_options):
        sample_options["whiteListedAddress"] = [_address(i) for i in range(20)]

        options = SamplingOptions.from_dict(sample_options)

        assert len(options.whitelisted_addresses) == 20

    def test_zero_samples_rejected(self, sample_options):
        sample_options["twavpNumberOfBlocks"] = 0

        with pytest.raises(ConfigurationException):
            SamplingOptions.from_dict(sample_options)

    def test_non_positive_days_rejected(self, sample_options):
        sample_options["twavpDaysInterval"] = 0

        with pytest.raises(ConfigurationException):
            SamplingOptions.from_dict(sample_options)

    @pytest.mark.parametrize("days", ["nan", float("nan"), float("inf"), "-inf"])
    def test_non_finite_days_rejected(self, sample_options, days):
        sample_options["twavpDaysInterval"] = days

        with pytest.raises(ConfigurationException, match="finite"):
            SamplingOptions.from_dict(sample_options)

    def test_fractional_sample_count_rejected(self, sample_options):
        sample_options["twavpNumberOfBlocks"] = 2.9

        with pytest.raises(ConfigurationException, match="integer"):
            SamplingOptions.from_dict(sample_options)

    def test_fractional_blocks_per_day_rejected(self, sample_options):
        sample_options["blocksPerDay"] = 7200.5

        with pytest.raises(ConfigurationException, match="integer"):
            SamplingOptions.from_dict(sample_options)

    def test_boolean_sample_count_rejected(self, sample_options):
        sample_options["twavpNumberOfBlocks"] = True

        with pytest.raises(ConfigurationException):
            SamplingOptions.from_dict(sample_options)

    @pytest.mark.parametrize("value", [2, 2.0, "2"])
    def test_integral_sample_count_accepted(self, sample_options, value):
        sample_options["twavpNumberOfBlocks"] = value

        options = SamplingOptions.from_dict(sample_options)

        assert options.number_of_samples == 2
        assert isinstance(options.number_of_samples, int)

    def test_direct_construction_checks_sample_type(self):
        with pytest.raises(ConfigurationException, match="integer"):
            SamplingOptions(
                number_of_samples=1.5,
                days_interval=7,
                destination_blocks_per_day=7200,
                gauge_address=GAUGE,
            )

    def test_invalid_gauge_rejected(self, sample_options):
        sample_options["sdTokenGauge"] = "0xnotanaddress"

        with pytest.raises(ConfigurationException, match="gauge"):
            SamplingOptions.from_dict(sample_options)

    def test_invalid_whitelisted_address_rejected(self, sample_options):
        sample_options["whiteListedAddress"] = ["0x1234"]

        with pytest.raises(ConfigurationException, match="whitelisted"):
            SamplingOptions.from_dict(sample_options)

    def test_configuration_errors_are_not_retryable(self):
        assert issubclass(ConfigurationException, NonRetryableException)


class TestWhitelistMembership:
    def test_case_insensitive(self, sample_options):
        sample_options["whiteListedAddress"] = [GAUGE]
        options = SamplingOptions.from_dict(sample_options)

        assert options.is_whitelisted(GAUGE.lower())
        assert not options.is_whitelisted(_address(1))


class TestResolveSnapshot:
    def test_latest(self):
        assert resolve_snapshot("latest") is None
        assert resolve_snapshot(None) is None

    def test_explicit_block(self):
        assert resolve_snapshot(1_000_000) == 1_000_000
        assert resolve_snapshot("1000000") == 1_000_000

    @pytest.mark.parametrize("snapshot", ["pending", -1, True])
    def test_invalid(self, snapshot):
        with pytest.raises(ConfigurationException):
            resolve_snapshot(snapshot)


class TestBlockSchedule:
    def test_lengths_must_match(self):
        with pytest.raises(ValueError):
            BlockSchedule(home_blocks=[1, 2], destination_blocks=[3])
