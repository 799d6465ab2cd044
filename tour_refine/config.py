"""
config.py
=================

Overview
--------
Caller-side settings of the improvement stages. The engines take plain
arguments; these dataclasses bundle them so a driver can describe a whole
run as a sequence of stages.

Key Classes:
- TwoOptConfig: threshold and budgets of a 2-opt local search.
- ThreeOptConfig: threshold, budgets and reconciliation period of a 3-opt search.
- AnnealingConfig: length, starting temperature and seed of an annealing walk.

Dependencies:
- dataclasses
"""

from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    "Raised when a stage setting is out of range."


def _check_non_negative(name, value):
    if value is not None and not value >= 0:
        raise ConfigError(f"{name} must be non-negative, got {value!r}.")


@dataclass
class TwoOptConfig:
    "Settings of a 2-opt local search stage."

    threshold: float = 1e-6
    max_iterations: int = 1_000_000   # inner comparisons, not sweeps
    time_budget: Optional[float] = None   # seconds
    progress: bool = False

    def __post_init__(self):
        _check_non_negative("threshold", self.threshold)
        _check_non_negative("max_iterations", self.max_iterations)
        _check_non_negative("time_budget", self.time_budget)


@dataclass
class ThreeOptConfig:
    "Settings of a 3-opt local search stage."

    threshold: float = 1e-12
    max_iterations: int = 10_000_000_000
    time_budget: Optional[float] = None
    reconcile_every: Optional[int] = None   # applied moves between full recomputations
    progress: bool = False

    def __post_init__(self):
        _check_non_negative("threshold", self.threshold)
        _check_non_negative("max_iterations", self.max_iterations)
        _check_non_negative("time_budget", self.time_budget)
        if self.reconcile_every is not None and self.reconcile_every < 1:
            raise ConfigError(f"reconcile_every must be at least 1, got {self.reconcile_every!r}.")


@dataclass
class AnnealingConfig:
    "Settings of a simulated annealing stage."

    iterations: int = 10_000
    initial_temperature: float = 100.0
    seed: Optional[int] = None
    progress: bool = False

    def __post_init__(self):
        _check_non_negative("iterations", self.iterations)
        _check_non_negative("initial_temperature", self.initial_temperature)
