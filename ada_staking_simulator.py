"""
ADA Staking Simulator
=====================

A day-stepped model of a staked Cardano (ADA) position. Rewards are credited
at fixed payout epochs and compound against the current balance, while the
reference price drifts by a fixed multiplier every day.

Features:
- Pool configuration loaded from ``pool.json``
- Deterministic compounding engine with optional historical series
- Terminal progress and summary reporting
- CSV export and SVG growth chart
- Yield x price-drift sensitivity matrix
"""

from __future__ import annotations

import argparse
import dataclasses
import io
import logging
import math
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO, TypeAlias

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, ValidationError

__version__ = "0.3.0"

logger = logging.getLogger(__name__)


# =============================================================================
# Type Aliases
# =============================================================================

FloatArray: TypeAlias = NDArray[np.float64]


# =============================================================================
# Constants
# =============================================================================

DAYS_PER_YEAR = 365.25

# Upper bound on simulated days; keeps history tracking memory bounded
MAX_SIMULATED_DAYS = 10_000_000

DEFAULT_CONFIG_PATH = "pool.json"
CSV_HEADER = ["Day", "ADA", "Price", "Total"]
CSV_FILENAME_TEMPLATE = "raw_ada_calc_data_{timestamp}.csv"
GRAPH_FILENAME_TEMPLATE = "ada_growth_graph_{timestamp}.svg"


# =============================================================================
# Errors
# =============================================================================


class StakingSimulatorError(Exception):
    """Base class for all simulator errors."""


class ConfigNotFound(StakingSimulatorError):
    """The pool configuration file does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to find {self.path}!")


class ConfigParseError(StakingSimulatorError, ValueError):
    """The pool configuration file is malformed or has missing/mistyped fields."""

    def __init__(self, path: str | Path, reason: Any) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to parse {self.path}: {reason}")


class InvalidConfiguration(StakingSimulatorError, ValueError):
    """A pool configuration that cannot be simulated."""


class ExportWriteError(StakingSimulatorError):
    """A CSV or chart export could not be written."""

    def __init__(self, path: str | Path, reason: Any) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path} to disk: {reason}")


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class PoolConfig:
    """Staked pool parameters, read once and never mutated."""

    principal_amount: float = 1000.0
    fetch_price_live: bool = False  # Accepted for schema compatibility, no effect
    initial_price: float = 1.0
    daily_price_multiplier: float = 1.0  # 1.01 = +1% per day, < 1 models decline
    annual_yield_fraction: float = 0.05  # 0.05 = 5% per year
    epoch_days: int = 5
    years_held: float = 1

    def __post_init__(self) -> None:
        """Validate configuration."""
        if isinstance(self.epoch_days, bool) or not isinstance(self.epoch_days, int):
            raise InvalidConfiguration(f"epoch_days must be an integer, got {self.epoch_days!r}")
        if self.epoch_days <= 0:
            raise InvalidConfiguration(f"epoch_days must be positive, got {self.epoch_days}")

        for name in (
            "principal_amount",
            "initial_price",
            "daily_price_multiplier",
            "annual_yield_fraction",
            "years_held",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfiguration(f"{name} must be finite, got {value}")
            if value < 0:
                raise InvalidConfiguration(f"{name} must be >= 0, got {value}")

        # Finite years can still overflow once scaled to days
        if not math.isfinite(self.years_held * DAYS_PER_YEAR):
            raise InvalidConfiguration(
                f"years_held={self.years_held} overflows the simulated day count, "
                f"the limit is {MAX_SIMULATED_DAYS}"
            )
        if self.total_days > MAX_SIMULATED_DAYS:
            raise InvalidConfiguration(
                f"years_held={self.years_held} gives {self.total_days} simulated days, "
                f"the limit is {MAX_SIMULATED_DAYS}"
            )

    @property
    def total_days(self) -> int:
        """Number of simulated days, day 0 included."""
        return round(self.years_held * DAYS_PER_YEAR) + 1

    @property
    def epochs_per_year(self) -> float:
        return DAYS_PER_YEAR / self.epoch_days

    @property
    def initial_value(self) -> float:
        """Position value at day 0 in the reference currency."""
        return self.initial_price * self.principal_amount


@dataclass(frozen=True)
class RunOptions:
    """Recognized output options for a simulation run."""

    verbose: bool = False
    generate_csv: bool = False
    generate_graph: bool = False

    @property
    def track_history(self) -> bool:
        """Historical series are only kept when something will export them."""
        return self.generate_csv or self.generate_graph


class PoolFile(BaseModel):
    """
    On-disk schema of ``pool.json``.

    Field names follow the file format; ``to_config`` maps them onto
    ``PoolConfig``. Strict mode rejects strings, floats for integer fields
    and integers for booleans.
    """

    model_config = ConfigDict(strict=True)

    ada: float
    fetch_price_via_api: bool
    initial_price: float
    price_yield: float
    annual_yield: float
    epoch_in_days: int
    years_holding: float

    def to_config(self) -> PoolConfig:
        return PoolConfig(
            principal_amount=self.ada,
            fetch_price_live=self.fetch_price_via_api,
            initial_price=self.initial_price,
            daily_price_multiplier=self.price_yield,
            annual_yield_fraction=self.annual_yield,
            epoch_days=self.epoch_in_days,
            years_held=self.years_holding,
        )


def load_pool_config(path: str | Path = DEFAULT_CONFIG_PATH) -> PoolConfig:
    """
    Load a pool configuration from a JSON file.

    Raises:
        ConfigNotFound: the file does not exist
        ConfigParseError: the file is unreadable, not JSON, or fields are missing/mistyped
        InvalidConfiguration: the values parse but cannot be simulated
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFound(path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, e) from e

    try:
        pool = PoolFile.model_validate_json(text)
    except ValidationError as e:
        raise ConfigParseError(path, e) from e

    return pool.to_config()


# =============================================================================
# Simulation State and Result
# =============================================================================


@dataclass
class SimulationState:
    """Mutable state of a single run; never outlives the run."""

    balance: float
    price: float
    annual_reward_rate: float
    payouts: int = 0

    @classmethod
    def from_config(cls, config: PoolConfig) -> SimulationState:
        return cls(
            balance=config.principal_amount,
            price=config.initial_price,
            annual_reward_rate=config.principal_amount * config.annual_yield_fraction,
        )

    @property
    def total_value(self) -> float:
        return self.balance * self.price

    def apply_payout(self, epochs_per_year: float, annual_yield_fraction: float) -> None:
        """Credit one epoch of rewards, then re-base the reward rate on the new balance."""
        self.balance += self.annual_reward_rate / epochs_per_year
        self.annual_reward_rate = self.balance * annual_yield_fraction
        self.payouts += 1

    def apply_price_drift(self, daily_price_multiplier: float) -> None:
        self.price *= daily_price_multiplier


@dataclass(frozen=True)
class SimulationResult:
    """
    Output of a simulation run.

    When history was tracked, ``balance_history[d]`` and ``price_history[d]``
    hold the state at the start of day ``d`` (entry 0 is the opening state),
    so the final values are not part of the series. Otherwise both are empty.
    """

    final_balance: float
    final_price: float
    total_days: int
    balance_history: list[float] = field(default_factory=list)
    price_history: list[float] = field(default_factory=list)
    payout_count: int = 0
    initial_annual_reward: float = 0.0

    @property
    def days_as_float(self) -> float:
        """Chart x-axis extent."""
        return float(self.total_days)

    @property
    def has_history(self) -> bool:
        return bool(self.balance_history)

    def total_value(self) -> float:
        """Final position value: balance * price."""
        return self.final_balance * self.final_price

    def yield_percentage(self, config: PoolConfig) -> float | None:
        """
        Final value relative to the initial value, in percent.

        100.0 means no growth. Returns None when the initial value is zero,
        since the ratio is undefined.
        """
        initial_value = config.initial_value
        if initial_value == 0:
            return None
        return (self.total_value() / initial_value) * 100.0

    def gain_percentage(self, config: PoolConfig) -> float | None:
        """Growth over the initial value in percent (0.0 means no growth)."""
        pct = self.yield_percentage(config)
        if pct is None:
            return None
        return pct - 100.0

    def to_dataframe(self) -> pd.DataFrame:
        """Tracked series as a DataFrame with one row per day, day 0 included."""
        balances = np.asarray(self.balance_history, dtype=float)
        prices = np.asarray(self.price_history, dtype=float)
        return pd.DataFrame({
            "Day": np.arange(len(balances), dtype=int),
            "ADA": balances,
            "Price": prices,
            "Total": balances * prices,
        })

    def get_summary_statistics(self, config: PoolConfig) -> dict[str, Any]:
        """Get summary statistics for reporting."""
        if config.initial_price > 0:
            price_change = self.final_price / config.initial_price - 1.0
        else:
            price_change = None

        return {
            "total_days": self.total_days,
            "years_held": config.years_held,
            "epoch_days": config.epoch_days,
            "payout_count": self.payout_count,
            "initial_balance": config.principal_amount,
            "final_balance": self.final_balance,
            "rewards_earned": self.final_balance - config.principal_amount,
            "initial_annual_reward": self.initial_annual_reward,
            "initial_price": config.initial_price,
            "final_price": self.final_price,
            "price_change": price_change,
            "initial_value": config.initial_value,
            "total_value": self.total_value(),
            "yield_percentage": self.yield_percentage(config),
            "gain_percentage": self.gain_percentage(config),
        }


# =============================================================================
# Progress Reporting
# =============================================================================


class ProgressReporter(ABC):
    """Receives progress events from the simulation engine."""

    @abstractmethod
    def on_start(self, state: SimulationState) -> None:
        """Called once with the opening state, before day 1."""
        pass

    @abstractmethod
    def on_day(self, day: int, state: SimulationState, is_payout: bool) -> None:
        """Called with the closing state of every simulated day."""
        pass


class NullReporter(ProgressReporter):
    """Discards all progress events."""

    def on_start(self, state: SimulationState) -> None:
        pass

    def on_day(self, day: int, state: SimulationState, is_payout: bool) -> None:
        pass


class ConsoleReporter(ProgressReporter):
    """Prints progress lines to a text stream (stdout by default)."""

    def __init__(self, verbose: bool = False, stream: TextIO | None = None) -> None:
        self.verbose = verbose
        self.stream = stream

    def _print(self, line: str) -> None:
        print(line, file=self.stream if self.stream is not None else sys.stdout)

    def on_start(self, state: SimulationState) -> None:
        self._print(
            f"Initial ADA Per Year (Excluding Compounding Interest): {state.annual_reward_rate}"
        )
        label = "Day 0" if self.verbose else "Starting Result"
        self._print(f"{label}: {format_position(state.balance, state.price)}")

    def on_day(self, day: int, state: SimulationState, is_payout: bool) -> None:
        if not self.verbose:
            return
        pay_day = "Yes" if is_payout else "No"
        self._print(f"Day {day}: {format_position(state.balance, state.price)} [Pay Day: {pay_day}]")


# =============================================================================
# Simulation Engine
# =============================================================================


class StakingSimulator:
    """
    Day-stepped compounding engine for a single staked pool.

    Each day is two independent effects: an epoch-gated reward payout and
    an unconditional price drift. A payout on day ``d`` happens iff
    ``d > 0 and d % epoch_days == 0`` and is applied before that day's drift.
    """

    def __init__(
        self,
        config: PoolConfig,
        reporter: ProgressReporter | None = None,
    ) -> None:
        if config.epoch_days <= 0:
            raise InvalidConfiguration(f"epoch_days must be positive, got {config.epoch_days}")

        self.config = config
        self.reporter = reporter or NullReporter()

        # Fixed for the whole run
        self.epochs_per_year = config.epochs_per_year

    def is_payout_day(self, day: int) -> bool:
        """Check whether rewards are credited on the given day."""
        return day > 0 and day % self.config.epoch_days == 0

    def run_day(self, state: SimulationState, day: int) -> bool:
        """
        Advance the state through one simulated day.

        Returns:
            True if the day was a payout day
        """
        is_payout = self.is_payout_day(day)
        if is_payout:
            state.apply_payout(self.epochs_per_year, self.config.annual_yield_fraction)

        state.apply_price_drift(self.config.daily_price_multiplier)
        return is_payout

    def run(self, track_history: bool = False) -> SimulationResult:
        """
        Run the full simulation.

        Args:
            track_history: Record the per-day balance and price series

        Returns:
            SimulationResult with final values and (optionally) the series
        """
        total_days = self.config.total_days
        state = SimulationState.from_config(self.config)
        initial_annual_reward = state.annual_reward_rate

        balances: list[float] = []
        prices: list[float] = []
        if track_history:
            balances.append(state.balance)
            prices.append(state.price)

        self.reporter.on_start(state)

        for day in range(1, total_days):
            # Start-of-day snapshot, taken before the payout and drift
            if track_history:
                balances.append(state.balance)
                prices.append(state.price)

            is_payout = self.run_day(state, day)
            self.reporter.on_day(day, state, is_payout)

        return SimulationResult(
            final_balance=state.balance,
            final_price=state.price,
            total_days=total_days,
            balance_history=balances,
            price_history=prices,
            payout_count=state.payouts,
            initial_annual_reward=initial_annual_reward,
        )


def calculate_staked_pool(
    config: PoolConfig,
    options: RunOptions | None = None,
    reporter: ProgressReporter | None = None,
) -> SimulationResult:
    """
    Simulate a staked pool for the configured holding period.

    History is tracked only when ``options`` requests an export.
    """
    options = options or RunOptions()
    simulator = StakingSimulator(config, reporter=reporter)
    return simulator.run(track_history=options.track_history)


# =============================================================================
# Sensitivity Matrix
# =============================================================================


@dataclass
class SensitivityMatrixConfig:
    """Annual yield x daily price multiplier grid."""

    yield_levels: list[float] = field(
        default_factory=lambda: [0.02, 0.03, 0.045, 0.05, 0.06, 0.08]
    )
    multiplier_levels: list[float] = field(
        default_factory=lambda: [0.999, 1.0, 1.0005, 1.001, 1.002, 1.005]
    )

    def __post_init__(self) -> None:
        """Validate levels."""
        for name in ("yield_levels", "multiplier_levels"):
            levels = getattr(self, name)
            if len(levels) == 0:
                raise InvalidConfiguration(f"{name} must not be empty")
            for value in levels:
                if not math.isfinite(value) or value < 0:
                    raise InvalidConfiguration(f"{name} must be finite and >= 0, got {value}")

    @classmethod
    def parse(cls, yield_text: str, multiplier_text: str) -> SensitivityMatrixConfig:
        """Build a grid from newline-separated levels; blank lines are skipped."""
        return cls(
            yield_levels=_parse_levels("yield_levels", yield_text),
            multiplier_levels=_parse_levels("multiplier_levels", multiplier_text),
        )

    @classmethod
    def around(
        cls,
        config: PoolConfig,
        yield_steps: tuple[float, ...] = (0.5, 0.75, 1.0, 1.25, 1.5),
        multiplier_offsets: tuple[float, ...] = (-0.002, -0.001, 0.0, 0.001, 0.002),
    ) -> SensitivityMatrixConfig:
        """Build a grid centred on the configured yield and multiplier."""
        yields = [config.annual_yield_fraction * s for s in yield_steps]
        multipliers = [max(config.daily_price_multiplier + o, 0.0) for o in multiplier_offsets]
        return cls(
            yield_levels=sorted(set(yields)),
            multiplier_levels=sorted(set(multipliers)),
        )


def _parse_levels(name: str, text: str) -> list[float]:
    levels = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            levels.append(float(line))
        except ValueError as e:
            raise InvalidConfiguration(f"{name}: {line!r} is not a number") from e
    return levels


@dataclass
class SensitivityMatrixResult:
    """Results of a sensitivity sweep. Matrices have shape (yields, multipliers)."""

    yield_levels: FloatArray
    multiplier_levels: FloatArray

    final_balance: FloatArray
    final_price: FloatArray
    total_value: FloatArray
    yield_percentage: FloatArray  # NaN where the initial value is zero


def compute_sensitivity_matrix(
    config: PoolConfig,
    matrix_config: SensitivityMatrixConfig | None = None,
) -> SensitivityMatrixResult:
    """
    Run the engine for every (annual yield, price multiplier) pair.

    All other parameters come from ``config``. No history is tracked.
    """
    matrix_config = matrix_config or SensitivityMatrixConfig.around(config)
    yields = np.array(matrix_config.yield_levels, dtype=float)
    multipliers = np.array(matrix_config.multiplier_levels, dtype=float)

    shape = (len(yields), len(multipliers))
    final_balance = np.zeros(shape)
    final_price = np.zeros(shape)
    total_value = np.zeros(shape)
    yield_pct = np.full(shape, np.nan)

    for i, y in enumerate(yields):
        for j, m in enumerate(multipliers):
            scenario = dataclasses.replace(
                config,
                annual_yield_fraction=float(y),
                daily_price_multiplier=float(m),
            )
            result = StakingSimulator(scenario).run()

            final_balance[i, j] = result.final_balance
            final_price[i, j] = result.final_price
            total_value[i, j] = result.total_value()

            pct = result.yield_percentage(scenario)
            if pct is not None:
                yield_pct[i, j] = pct

    return SensitivityMatrixResult(
        yield_levels=yields,
        multiplier_levels=multipliers,
        final_balance=final_balance,
        final_price=final_price,
        total_value=total_value,
        yield_percentage=yield_pct,
    )


# =============================================================================
# Reporting
# =============================================================================


def format_position(balance: float, price: float) -> str:
    """Format a position as '<ada> ADA @ $<price> = $<total>'."""
    return f"{balance} ADA @ ${price:.2f} = ${balance * price:.2f}"


def format_currency(value: float) -> str:
    """Format a value as currency."""
    if abs(value) >= 1_000_000:
        return f"${value/1_000_000:,.2f}M"
    elif abs(value) >= 1_000:
        return f"${value/1_000:,.2f}K"
    else:
        return f"${value:,.2f}"


def format_percentage(value: float | None, signed: bool = False) -> str:
    """Format a percentage already expressed in percent; None and NaN are 'N/A'."""
    if value is None or math.isnan(value):
        return "N/A"
    return f"{value:+.2f}%" if signed else f"{value:.2f}%"


def format_summary_line(result: SimulationResult, config: PoolConfig) -> str:
    """Final one-line result printed at the end of every run."""
    return (
        f"Final Result: {format_position(result.final_balance, result.final_price)} "
        f"Yield: {format_percentage(result.yield_percentage(config))} of initial "
        f"(Gainz: {format_percentage(result.gain_percentage(config), signed=True)})"
    )


class SimulationReport:
    """Generate reports from simulation results."""

    def __init__(self, result: SimulationResult, config: PoolConfig) -> None:
        self.result = result
        self.config = config

    def print_summary(self) -> None:
        """Print summary statistics."""
        stats = self.result.get_summary_statistics(self.config)
        price_change = stats["price_change"]

        print("\n" + "=" * 70)
        print("ADA STAKING SIMULATOR - SUMMARY REPORT")
        print("=" * 70)

        print(
            f"\nHolding Period: {stats['years_held']} years ({stats['total_days']} days), "
            f"payout every {stats['epoch_days']} days"
        )

        print("\n--- Balance ---")
        print(f"Initial ADA:      {stats['initial_balance']:,.6f}")
        print(f"Final ADA:        {stats['final_balance']:,.6f}")
        print(f"Rewards Earned:   {stats['rewards_earned']:,.6f} ({stats['payout_count']} payouts)")

        print("\n--- Price ---")
        print(f"Initial Price:    ${stats['initial_price']:,.2f}")
        print(f"Final Price:      ${stats['final_price']:,.2f}")
        print(
            "Price Change:     "
            + format_percentage(None if price_change is None else price_change * 100, signed=True)
        )

        print("\n--- Value ---")
        print(f"Initial Value:    {format_currency(stats['initial_value'])}")
        print(f"Final Value:      {format_currency(stats['total_value'])}")
        print(f"Yield:            {format_percentage(stats['yield_percentage'])} of initial")
        print(f"Gain:             {format_percentage(stats['gain_percentage'], signed=True)}")

        print("=" * 70)

    def print_sensitivity_matrix(self, matrix: SensitivityMatrixResult) -> None:
        """Print the final value matrix with yield percentages."""
        width = 16 * len(matrix.multiplier_levels) + 12

        print(f"\n{'=' * width}")
        print("ANNUAL YIELD × DAILY PRICE MULTIPLIER: FINAL VALUE (YIELD % OF INITIAL)")
        print(f"{'=' * width}")

        header = f"{'Yield':>10} |"
        for m in matrix.multiplier_levels:
            header += f" x{m:.4f}".rjust(14) + " |"
        print(header)
        print("-" * width)

        for i, y in enumerate(matrix.yield_levels):
            row = f"{y:>10.2%} |"
            for j in range(len(matrix.multiplier_levels)):
                row += f" {format_currency(matrix.total_value[i, j]):>13} |"
            print(row)

            row = f"{'':>10} |"
            for j in range(len(matrix.multiplier_levels)):
                row += f" {format_percentage(matrix.yield_percentage[i, j]):>13} |"
            print(row)

        print("=" * width)


# =============================================================================
# Export
# =============================================================================


def get_epoch_ms() -> int:
    """Current Unix timestamp in milliseconds, used in output filenames."""
    return time.time_ns() // 1_000_000


def _write_new_file(path: Path, payload: bytes) -> None:
    """Create ``path`` and write ``payload`` in one call; a partial file is removed."""
    try:
        fh = open(path, "xb")
    except OSError as e:
        raise ExportWriteError(path, e) from e

    try:
        with fh:
            fh.write(payload)
    except OSError as e:
        path.unlink(missing_ok=True)
        raise ExportWriteError(path, e) from e


def write_csv(
    result: SimulationResult,
    directory: str | Path = ".",
    timestamp_ms: int | None = None,
) -> Path:
    """
    Write the tracked series as ``raw_ada_calc_data_<timestamp>.csv``.

    One row per simulated day from day 1 to the last day. The file must not
    already exist.

    Raises:
        ExportWriteError: no history was tracked, rendering failed or the
            file cannot be created
    """
    timestamp_ms = get_epoch_ms() if timestamp_ms is None else timestamp_ms
    path = Path(directory) / CSV_FILENAME_TEMPLATE.format(timestamp=timestamp_ms)

    if not result.has_history:
        raise ExportWriteError(path, "no historical series were recorded")

    try:
        rows = result.to_dataframe().iloc[1:]
        payload = rows.to_csv(index=False, columns=CSV_HEADER, lineterminator="\n").encode("utf-8")
    except Exception as e:
        raise ExportWriteError(path, e) from e

    _write_new_file(path, payload)

    logger.info("Saved CSV as %s to Disk.", path)
    return path


def generate_graph(
    result: SimulationResult,
    directory: str | Path = ".",
    timestamp_ms: int | None = None,
) -> Path:
    """
    Render the ADA, price and total value series as ``ada_growth_graph_<timestamp>.svg``.

    Raises:
        ExportWriteError: no history was tracked, rendering failed or the
            file cannot be created
    """
    import matplotlib.pyplot as plt
    import matplotlib.ticker as mticker

    timestamp_ms = get_epoch_ms() if timestamp_ms is None else timestamp_ms
    path = Path(directory) / GRAPH_FILENAME_TEMPLATE.format(timestamp=timestamp_ms)

    if not result.has_history:
        raise ExportWriteError(path, "no historical series were recorded")

    df = result.to_dataframe()

    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)
    fig.suptitle("Cardano Staking Growth", fontsize=14, fontweight="bold")

    series = [
        ("ADAs (₳)", "ADA", "#3498db"),
        ("Prices ($)", "Price", "#27ae60"),
        ("Total ($)", "Total", "#2c3e50"),
    ]
    for ax, (label, column, color) in zip(axes, series):
        ax.plot(df["Day"], df[column], label=label, color=color, linewidth=2)
        ax.set_ylabel(label)
        ax.legend(loc="upper left")
        ax.grid(True, alpha=0.3)

    axes[1].yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.2f}"))
    axes[2].yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: format_currency(x)))
    axes[-1].set_xlabel("Days")
    axes[-1].set_xlim(0, result.days_as_float)

    buffer = io.BytesIO()
    try:
        plt.tight_layout()
        fig.savefig(buffer, format="svg", bbox_inches="tight")
    except Exception as e:
        raise ExportWriteError(path, e) from e
    finally:
        plt.close(fig)

    _write_new_file(path, buffer.getvalue())

    logger.info("Generated Graph in SVG Format Under %s", path)
    return path


# =============================================================================
# Main Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Command line interface of the simulator."""
    parser = argparse.ArgumentParser(
        prog="ada-staking",
        description="ADA Staking Calculator For Data Analysis and Visualization Purposes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show Full Output to Terminal/Output",
    )
    parser.add_argument(
        "-g", "--generate_csv",
        action="store_true",
        help="Generate a CSV file of the calculated data, output will be raw_ada_calc_data_<timestamp>.csv",
    )
    parser.add_argument(
        "-G", "--generate_graph",
        action="store_true",
        help="Generate a line graph of ADA, price and total value over time, "
             "output will be ada_growth_graph_<timestamp>.svg",
    )
    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Pool configuration file (default: %(default)s)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=".",
        help="Directory for CSV and graph output (default: current working directory)",
    )
    parser.add_argument(
        "--sensitivity",
        action="store_true",
        help="Print a summary report and an annual yield × price multiplier sensitivity matrix",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    options = RunOptions(
        verbose=args.verbose,
        generate_csv=args.generate_csv,
        generate_graph=args.generate_graph,
    )

    if options.generate_csv:
        if args.output_dir == ".":
            print("CSV will be saved in current working directory.")
        else:
            print(f"CSV will be saved in {args.output_dir}.")

    try:
        config = load_pool_config(args.config)
        result = calculate_staked_pool(config, options, ConsoleReporter(verbose=options.verbose))
    except StakingSimulatorError as e:
        logger.error("%s", e)
        return 1

    print(format_summary_line(result, config))

    # Export failures are reported but never change the exit code
    if options.generate_csv:
        try:
            write_csv(result, args.output_dir)
        except ExportWriteError as e:
            logger.error("Failed to Write CSV [%s] to Disk. Reason: %s", e.path, e.reason)

    if options.generate_graph:
        try:
            generate_graph(result, args.output_dir)
        except ExportWriteError as e:
            logger.error("Failed to Write SVG [%s] to Disk. Reason: %s", e.path, e.reason)

    if args.sensitivity:
        report = SimulationReport(result, config)
        report.print_summary()
        report.print_sensitivity_matrix(compute_sensitivity_matrix(config))

    return 0


if __name__ == "__main__":
    sys.exit(main())
