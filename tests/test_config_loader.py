"""Tests for loading pool.json."""

import pytest

from ada_staking_simulator import (
    ConfigNotFound,
    ConfigParseError,
    InvalidConfiguration,
    PoolConfig,
    PoolFile,
    StakingSimulatorError,
    load_pool_config,
)


class TestLoadPoolConfig:
    """Tests for load_pool_config."""

    def test_loads_valid_document(self, write_pool_file, pool_document):
        config = load_pool_config(write_pool_file(pool_document))

        assert config == PoolConfig(
            principal_amount=1000.0,
            fetch_price_live=False,
            initial_price=0.5,
            daily_price_multiplier=1.001,
            annual_yield_fraction=0.045,
            epoch_days=5,
            years_held=2,
        )

    def test_integer_numbers_accepted(self, write_pool_file, pool_document):
        pool_document.update(ada=250, initial_price=1, price_yield=1, years_holding=10)
        config = load_pool_config(write_pool_file(pool_document))

        assert config.principal_amount == 250.0
        assert config.years_held == 10.0
        assert config.total_days == 3653

    def test_fractional_years_accepted(self, write_pool_file, pool_document):
        pool_document["years_holding"] = 0.5
        config = load_pool_config(write_pool_file(pool_document))

        assert config.total_days == 184

    def test_unknown_keys_ignored(self, write_pool_file, pool_document):
        pool_document["comment"] = "conservative case"
        config = load_pool_config(write_pool_file(pool_document))

        assert config.epoch_days == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigNotFound) as exc_info:
            load_pool_config(tmp_path / "pool.json")

        assert "pool.json" in str(exc_info.value)
        assert isinstance(exc_info.value, StakingSimulatorError)

    def test_malformed_json(self, write_pool_file):
        with pytest.raises(ConfigParseError):
            load_pool_config(write_pool_file('{"ada": 1000,'))

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ConfigParseError):
            load_pool_config(tmp_path)

    def test_missing_field(self, write_pool_file, pool_document):
        del pool_document["epoch_in_days"]

        with pytest.raises(ConfigParseError) as exc_info:
            load_pool_config(write_pool_file(pool_document))

        assert "epoch_in_days" in str(exc_info.value)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("ada", "1000"),
            ("epoch_in_days", 5.5),
            ("fetch_price_via_api", 1),
            ("annual_yield", None),
        ],
    )
    def test_mistyped_field(self, write_pool_file, pool_document, key, value):
        pool_document[key] = value

        with pytest.raises(ConfigParseError):
            load_pool_config(write_pool_file(pool_document))

    def test_parse_error_is_value_error(self, write_pool_file):
        with pytest.raises(ValueError):
            load_pool_config(write_pool_file("not json"))

    def test_zero_epoch_is_invalid_configuration(self, write_pool_file, pool_document):
        pool_document["epoch_in_days"] = 0

        with pytest.raises(InvalidConfiguration):
            load_pool_config(write_pool_file(pool_document))

    def test_negative_years_is_invalid_configuration(self, write_pool_file, pool_document):
        pool_document["years_holding"] = -1

        with pytest.raises(InvalidConfiguration):
            load_pool_config(write_pool_file(pool_document))


    def test_overflowing_years_is_invalid_configuration(self, write_pool_file, pool_document):
        pool_document["years_holding"] = 1e308

        with pytest.raises(InvalidConfiguration):
            load_pool_config(write_pool_file(pool_document))


class TestPoolFile:
    """Tests for the on-disk schema."""

    def test_to_config_field_mapping(self, pool_document):
        pool_document["fetch_price_via_api"] = True
        config = PoolFile(**pool_document).to_config()

        assert config.principal_amount == pool_document["ada"]
        assert config.fetch_price_live is True
        assert config.daily_price_multiplier == pool_document["price_yield"]
        assert config.annual_yield_fraction == pool_document["annual_yield"]
        assert config.epoch_days == pool_document["epoch_in_days"]
        assert config.years_held == pool_document["years_holding"]
