"""Pytest configuration and shared fixtures."""

import json

import matplotlib
import pytest

from ada_staking_simulator import PoolConfig

# Headless rendering for graph export tests
matplotlib.use("Agg")


@pytest.fixture
def base_config():
    """1000 ADA at $1.00, flat price, 5% yield, 5-day epochs, one year."""
    return PoolConfig(
        principal_amount=1000.0,
        fetch_price_live=False,
        initial_price=1.0,
        daily_price_multiplier=1.0,
        annual_yield_fraction=0.05,
        epoch_days=5,
        years_held=1,
    )


@pytest.fixture
def pool_document():
    """A valid pool.json document."""
    return {
        "ada": 1000.0,
        "fetch_price_via_api": False,
        "initial_price": 0.5,
        "price_yield": 1.001,
        "annual_yield": 0.045,
        "epoch_in_days": 5,
        "years_holding": 2,
    }


@pytest.fixture
def write_pool_file(tmp_path):
    """Factory writing a pool document (dict or raw text) to tmp_path/pool.json."""

    def _write(document, name="pool.json"):
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
