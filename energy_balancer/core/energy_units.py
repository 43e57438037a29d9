"""
Energy Units for the Energy Balancer

This module contains the two capabilities the optimizer works with:
energy sources that hold a level and energy consumption units that
demand a fixed rate per matching pass. Fuel/Battery and Engine/Hydraulics
are the same type tagged by kind.
"""

import math
from enum import Enum
from typing import Union

from PyQt6.QtCore import QMutex


class SourceKind(Enum):
    """Kinds of energy source"""
    FUEL = "fuel"
    BATTERY = "battery"


class ConsumerKind(Enum):
    """Kinds of energy consumption unit"""
    ENGINE = "engine"
    HYDRAULICS = "hydraulics"


class EnergyBalancerError(Exception):
    """Base exception for the energy balancer"""
    pass


class InvalidConfiguration(EnergyBalancerError, ValueError):
    """Exception raised when a source, consumer or scheduler is misconfigured"""
    pass


class EnergyExhausted(EnergyBalancerError):
    """Exception raised in strict mode when consumers found no eligible source"""

    def __init__(self, consumers):
        self.consumers = tuple(consumers)
        super().__init__(
            f"No source could satisfy consumer(s): {', '.join(self.consumers)}"
        )


class SchedulerCancelled(EnergyBalancerError):
    """Exception raised when the scheduler is stopped"""
    pass


def _coerce_kind(kind, enum_cls):
    if isinstance(kind, enum_cls):
        return kind
    try:
        return enum_cls(str(kind).strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in enum_cls)
        raise InvalidConfiguration(f"Unknown {enum_cls.__name__} '{kind}' (expected one of: {valid})")


def _coerce_amount(value, label: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{label} must be a number, got {value!r}")
    if not math.isfinite(amount):
        raise InvalidConfiguration(f"{label} must be finite, got {amount}")
    return amount


class EnergySource:
    """
    A store of energy with a mutable level.

    ``consume`` subtracts unconditionally. ``try_consume`` checks and
    subtracts under the source's own mutex, so a level can only go
    negative through ``consume``.
    """

    def __init__(self, name: str, kind: Union[SourceKind, str], level: float,
                 validate: bool = True):
        self.name = name
        self.kind = _coerce_kind(kind, SourceKind)
        self._level = _coerce_amount(level, f"Initial level of '{name}'")
        self._mutex = QMutex()

        if validate and self._level < 0:
            raise InvalidConfiguration(
                f"Initial level of '{name}' must not be negative: {self._level}"
            )

    @property
    def level(self) -> float:
        return self._level

    def get_level(self) -> float:
        """Current level (no side effect)"""
        return self._level

    def consume(self, amount: float) -> None:
        """Subtract ``amount`` from the level with no bounds check"""
        self._mutex.lock()
        try:
            self._level -= amount
        finally:
            self._mutex.unlock()

    def try_consume(self, amount: float) -> bool:
        """Subtract ``amount`` only if the level covers it at the time of subtraction"""
        self._mutex.lock()
        try:
            if self._level < amount:
                return False
            self._level -= amount
            return True
        finally:
            self._mutex.unlock()

    def __repr__(self):
        return f"EnergySource(name={self.name!r}, kind={self.kind.value!r}, level={self._level})"


class EnergyConsumptionUnit:
    """
    A consumer of energy with a fixed demand rate per matching pass.

    ``consumed`` accumulates everything charged through ``consume``;
    the rate itself never changes.
    """

    def __init__(self, name: str, kind: Union[ConsumerKind, str], rate: float,
                 validate: bool = True):
        self.name = name
        self.kind = _coerce_kind(kind, ConsumerKind)
        self._rate = _coerce_amount(rate, f"Rate of '{name}'")
        self.consumed = 0.0

        if validate and self._rate < 0:
            raise InvalidConfiguration(f"Rate of '{name}' must not be negative: {self._rate}")

    @property
    def rate(self) -> float:
        return self._rate

    def get_rate(self) -> float:
        """Fixed demand per pass"""
        return self._rate

    def consume(self, amount: float) -> None:
        """Record ``amount`` as drawn by this unit"""
        self.consumed += amount

    def __repr__(self):
        return f"EnergyConsumptionUnit(name={self.name!r}, kind={self.kind.value!r}, rate={self._rate})"
