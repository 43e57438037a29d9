import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication

from energy_balancer.core import EnergyConsumptionUnit, EnergyOptimizer, EnergySource


@pytest.fixture(scope="session")
def qapp():
    """One QCoreApplication for the whole test session"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def fuel():
    return EnergySource("fuel", "fuel", 100.0)


@pytest.fixture
def battery():
    return EnergySource("battery", "battery", 100.0)


@pytest.fixture
def engine():
    return EnergyConsumptionUnit("engine", "engine", 10.0)


@pytest.fixture
def hydraulics():
    return EnergyConsumptionUnit("hydraulics", "hydraulics", 5.0)


@pytest.fixture
def optimizer(fuel, battery, engine, hydraulics):
    return EnergyOptimizer([fuel, battery], [engine, hydraulics])
