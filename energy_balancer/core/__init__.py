"""
Core Package for Energy Balancer

This package contains the energy units, the matching optimizer and the
periodic scheduler that drives it.
"""

from .energy_units import (
    ConsumerKind,
    EnergyBalancerError,
    EnergyConsumptionUnit,
    EnergyExhausted,
    EnergySource,
    InvalidConfiguration,
    SchedulerCancelled,
    SourceKind,
)
from .optimizer import EnergyOptimizer
from .scheduler import EnergyScheduler

__all__ = [
    'ConsumerKind',
    'EnergyBalancerError',
    'EnergyConsumptionUnit',
    'EnergyExhausted',
    'EnergyOptimizer',
    'EnergyScheduler',
    'EnergySource',
    'InvalidConfiguration',
    'SchedulerCancelled',
    'SourceKind',
]
