"""
Fleet Configuration and Scheduler Defaults

This module contains the initial values of the equipment's energy
sources and consumers, the scheduler defaults, and helpers to validate
them and build the optimizer.
"""

from collections import Counter
from typing import List, Optional, Sequence, Tuple

from ..core.energy_units import (
    ConsumerKind,
    EnergyConsumptionUnit,
    EnergySource,
    InvalidConfiguration,
    SourceKind,
)
from ..core.optimizer import EnergyOptimizer
from ..core.scheduler import MAX_TIMER_SECONDS

# Source kind descriptions
SOURCE_KINDS = {
    SourceKind.FUEL.value: "Fuel tank",
    SourceKind.BATTERY.value: "Battery pack",
}

# Consumer kind descriptions
CONSUMER_KINDS = {
    ConsumerKind.ENGINE.value: "Engine",
    ConsumerKind.HYDRAULICS.value: "Hydraulic system",
}

# (kind, initial level) per source, in matching order
DEFAULT_SOURCES = [
    ("fuel", 100.0),
    ("battery", 100.0),
]

# (kind, rate per pass) per consumer, in matching order
DEFAULT_CONSUMERS = [
    ("engine", 10.0),
    ("hydraulics", 5.0),
]

# Default scheduler parameters
DEFAULT_SCHEDULER_PARAMS = {
    "interval": 1.0,
    "run_seconds": 5.0,
    "strict": False,
    "max_passes": None,
    "history_limit": 1000,
}


def get_source_kind_list():
    """Get list of source kinds for display"""
    return list(SOURCE_KINDS.keys())


def get_consumer_kind_list():
    """Get list of consumer kinds for display"""
    return list(CONSUMER_KINDS.keys())


def _split_pairs(pairs, value_label: str) -> List[Tuple[str, object]]:
    split = []
    for entry in pairs:
        try:
            kind, value = entry
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Expected a (kind, {value_label}) pair, got {entry!r}")
        split.append((str(getattr(kind, "value", kind)).strip().lower(), value))
    return split


def validate_fleet(sources: Sequence[Tuple[str, float]],
                   consumers: Sequence[Tuple[str, float]]) -> None:
    """Validate (kind, level) and (kind, rate) pairs"""
    build_sources(sources)
    build_consumers(consumers)


def validate_scheduler_params(params: dict) -> dict:
    """Validate and fill missing scheduler parameters with defaults"""
    validated_params = DEFAULT_SCHEDULER_PARAMS.copy()
    validated_params.update({k: v for k, v in params.items() if v is not None})

    # Validate ranges
    interval = validated_params["interval"]
    if not 0 < interval <= MAX_TIMER_SECONDS:
        raise InvalidConfiguration(f"Scheduler interval must be in (0, {MAX_TIMER_SECONDS}] seconds")
    run_seconds = validated_params["run_seconds"]
    if not 0 <= run_seconds <= MAX_TIMER_SECONDS:
        raise InvalidConfiguration(f"Run time must be in [0, {MAX_TIMER_SECONDS}] seconds")
    max_passes = validated_params["max_passes"]
    if max_passes is not None and max_passes < 0:
        raise InvalidConfiguration("max_passes must not be negative")
    if validated_params["history_limit"] < 1:
        raise InvalidConfiguration("history_limit must be at least 1")

    return validated_params


def _unit_names(pairs) -> List[str]:
    totals = Counter(kind for kind, _ in pairs)
    seen = Counter()
    names = []
    for kind, _ in pairs:
        seen[kind] += 1
        names.append(kind if totals[kind] == 1 else f"{kind}-{seen[kind]}")
    return names


def build_sources(pairs: Optional[Sequence[Tuple[str, float]]] = None) -> List[EnergySource]:
    """Create energy sources from (kind, initial level) pairs"""
    pairs = _split_pairs(DEFAULT_SOURCES if pairs is None else pairs, "initial level")
    return [
        EnergySource(name, kind, level)
        for name, (kind, level) in zip(_unit_names(pairs), pairs)
    ]


def build_consumers(pairs: Optional[Sequence[Tuple[str, float]]] = None) -> List[EnergyConsumptionUnit]:
    """Create consumption units from (kind, rate) pairs"""
    pairs = _split_pairs(DEFAULT_CONSUMERS if pairs is None else pairs, "rate")
    return [
        EnergyConsumptionUnit(name, kind, rate)
        for name, (kind, rate) in zip(_unit_names(pairs), pairs)
    ]


def build_optimizer(sources=None, consumers=None, strict: bool = False,
                    history_limit: int = DEFAULT_SCHEDULER_PARAMS["history_limit"]) -> EnergyOptimizer:
    """Build an optimizer over the given (or default) fleet"""
    return EnergyOptimizer(build_sources(sources), build_consumers(consumers),
                           strict=strict, history_limit=history_limit)
