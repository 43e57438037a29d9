"""
Configuration Package for Energy Balancer

This package contains the default fleet, scheduler parameters and
validation helpers.
"""

from .fleet_config import (
    SOURCE_KINDS,
    CONSUMER_KINDS,
    DEFAULT_SOURCES,
    DEFAULT_CONSUMERS,
    DEFAULT_SCHEDULER_PARAMS,
    get_source_kind_list,
    get_consumer_kind_list,
    validate_fleet,
    validate_scheduler_params,
    build_sources,
    build_consumers,
    build_optimizer
)

__all__ = [
    'SOURCE_KINDS',
    'CONSUMER_KINDS',
    'DEFAULT_SOURCES',
    'DEFAULT_CONSUMERS',
    'DEFAULT_SCHEDULER_PARAMS',
    'get_source_kind_list',
    'get_consumer_kind_list',
    'validate_fleet',
    'validate_scheduler_params',
    'build_sources',
    'build_consumers',
    'build_optimizer'
]
