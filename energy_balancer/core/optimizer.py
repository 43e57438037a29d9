"""
Energy Optimizer

This module contains the matching pass that pairs energy consumption
units with energy sources, plus the status snapshot and the per-pass
history summary used for reporting.

The pass is greedy and order dependent: each consumer, in order, checks
every source, in order, and draws its full rate from each source whose
level covers it. There is no early exit after a match.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .energy_units import (
    EnergyConsumptionUnit,
    EnergyExhausted,
    EnergySource,
    InvalidConfiguration,
)

logger = logging.getLogger(__name__)


class EnergyOptimizer:
    """
    Holds the sources and consumers and runs one matching pass at a time.

    Both collections are fixed at construction; nothing else mutates them.
    ``history`` keeps the last ``history_limit`` passes.
    """

    def __init__(self, sources: Sequence[EnergySource],
                 consumers: Sequence[EnergyConsumptionUnit],
                 strict: bool = False, history_limit: int = 1000):
        self._sources = tuple(sources)
        self._consumers = tuple(consumers)
        self.strict = strict
        self.pass_count = 0
        self.last_exhausted: Tuple[str, ...] = ()
        if history_limit < 1:
            raise InvalidConfiguration(f"history_limit must be at least 1: {history_limit}")
        self.history: Deque[Dict] = deque(maxlen=history_limit)

        self._check_unique_names()

    @property
    def sources(self) -> Tuple[EnergySource, ...]:
        return self._sources

    @property
    def consumers(self) -> Tuple[EnergyConsumptionUnit, ...]:
        return self._consumers

    def _check_unique_names(self):
        names = [unit.name for unit in self._sources + self._consumers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidConfiguration(f"Duplicate unit names: {duplicates}")

    def optimize(self) -> None:
        """Run one matching pass over all consumers x all sources"""
        exhausted = []

        for consumer in self._consumers:
            matched = 0
            for source in self._sources:
                rate = consumer.get_rate()
                if source.try_consume(rate):
                    consumer.consume(rate)
                    matched += 1
                    logger.debug("%s drew %.2f from %s (level now %.2f)",
                                 consumer.name, rate, source.name, source.get_level())

            if matched == 0:
                exhausted.append(consumer.name)
                logger.warning("No source could satisfy %s (rate %.2f)",
                               consumer.name, consumer.get_rate())

        self.pass_count += 1
        self.last_exhausted = tuple(exhausted)
        self.history.append({
            "pass": self.pass_count,
            **{source.name: source.get_level() for source in self._sources},
            "exhausted": ", ".join(exhausted),
        })

        if exhausted and self.strict:
            raise EnergyExhausted(exhausted)

    def status(self) -> List[Tuple[str, float]]:
        """Source levels followed by consumer rates, in stored order"""
        entries = [(source.kind.value, source.get_level()) for source in self._sources]
        entries.extend((consumer.kind.value, consumer.get_rate()) for consumer in self._consumers)
        return entries

    def status_frame(self) -> pd.DataFrame:
        """Status snapshot as a DataFrame"""
        rows = [
            {"role": "source", "name": s.name, "kind": s.kind.value, "value": s.get_level()}
            for s in self._sources
        ]
        rows.extend(
            {"role": "consumer", "name": c.name, "kind": c.kind.value, "value": c.get_rate()}
            for c in self._consumers
        )
        return pd.DataFrame(rows, columns=["role", "name", "kind", "value"])

    def format_status(self, pass_number: Optional[int] = None) -> str:
        """Human-readable status report"""
        header = "Energy status" if pass_number is None else f"Energy status (pass {pass_number})"
        lines = [header]
        for source in self._sources:
            lines.append(f"  {source.kind.value.capitalize()} level: {source.get_level():.2f}")
        for consumer in self._consumers:
            lines.append(f"  {consumer.kind.value.capitalize()} rate: {consumer.get_rate():.2f}")
        return "\n".join(lines)

    def history_frame(self) -> pd.DataFrame:
        """One row per completed pass: source levels and exhausted consumers"""
        columns = ["pass"] + [source.name for source in self._sources] + ["exhausted"]
        return pd.DataFrame(list(self.history), columns=columns).set_index("pass")
