import logging

import pandas as pd
import pytest

from energy_balancer.core import (
    EnergyConsumptionUnit,
    EnergyExhausted,
    EnergyOptimizer,
    EnergySource,
    InvalidConfiguration,
)


def test_default_fleet_single_pass(optimizer, fuel, battery, engine, hydraulics):
    optimizer.optimize()

    # Engine draws from fuel and battery, then hydraulics does the same
    assert fuel.get_level() == 85.0
    assert battery.get_level() == 85.0
    assert engine.consumed == 20.0
    assert hydraulics.consumed == 10.0
    assert optimizer.pass_count == 1
    assert optimizer.last_exhausted == ()


def test_order_sensitivity():
    s1 = EnergySource("s1", "fuel", 12.0)
    s2 = EnergySource("s2", "battery", 100.0)
    c1 = EnergyConsumptionUnit("c1", "engine", 10.0)
    c2 = EnergyConsumptionUnit("c2", "hydraulics", 5.0)

    EnergyOptimizer([s1, s2], [c1, c2]).optimize()

    assert s1.get_level() == 2.0
    assert s2.get_level() == 85.0
    assert c1.consumed == 20.0
    assert c2.consumed == 5.0


def test_reversed_consumer_order_changes_outcome():
    s1 = EnergySource("s1", "fuel", 12.0)
    s2 = EnergySource("s2", "battery", 100.0)
    c1 = EnergyConsumptionUnit("c1", "engine", 10.0)
    c2 = EnergyConsumptionUnit("c2", "hydraulics", 5.0)

    EnergyOptimizer([s1, s2], [c2, c1]).optimize()

    # c2 takes 5 from s1 first, leaving 7 which is too little for c1
    assert s1.get_level() == 7.0
    assert s2.get_level() == 85.0


def test_ineligible_pair_is_untouched():
    low = EnergySource("low", "battery", 4.0)
    engine = EnergyConsumptionUnit("engine", "engine", 5.0)
    optimizer = EnergyOptimizer([low], [engine])

    optimizer.optimize()

    assert low.get_level() == 4.0
    assert engine.consumed == 0.0
    assert optimizer.last_exhausted == ("engine",)


def test_exhausted_consumer_logged(caplog):
    optimizer = EnergyOptimizer(
        [EnergySource("fuel", "fuel", 1.0)],
        [EnergyConsumptionUnit("engine", "engine", 10.0)],
    )
    with caplog.at_level(logging.WARNING, logger="energy_balancer.core.optimizer"):
        optimizer.optimize()
    assert "No source could satisfy engine" in caplog.text


def test_strict_mode_finishes_pass_then_raises():
    fuel = EnergySource("fuel", "fuel", 3.0)
    engine = EnergyConsumptionUnit("engine", "engine", 10.0)
    hydraulics = EnergyConsumptionUnit("hydraulics", "hydraulics", 2.0)
    optimizer = EnergyOptimizer([fuel], [engine, hydraulics], strict=True)

    with pytest.raises(EnergyExhausted) as excinfo:
        optimizer.optimize()

    assert excinfo.value.consumers == ("engine",)
    assert fuel.get_level() == 1.0
    assert optimizer.pass_count == 1


def test_levels_never_drop_below_zero_over_many_passes(optimizer, fuel, battery):
    for _ in range(50):
        optimizer.optimize()
    assert fuel.get_level() >= 0
    assert battery.get_level() >= 0
    assert optimizer.last_exhausted == ("engine", "hydraulics")


def test_negative_rate_accepted_silently_without_validation():
    fuel = EnergySource("fuel", "fuel", 10.0)
    odd = EnergyConsumptionUnit("engine", "engine", -5.0, validate=False)

    EnergyOptimizer([fuel], [odd]).optimize()

    assert fuel.get_level() == 15.0


def test_status_order_and_values(optimizer):
    assert optimizer.status() == [
        ("fuel", 100.0),
        ("battery", 100.0),
        ("engine", 10.0),
        ("hydraulics", 5.0),
    ]


def test_status_is_read_only(optimizer, fuel, battery):
    first = optimizer.status()
    second = optimizer.status()
    optimizer.status_frame()
    optimizer.format_status()
    assert first == second
    assert fuel.get_level() == 100.0
    assert battery.get_level() == 100.0
    assert optimizer.pass_count == 0


def test_passes_are_deterministic():
    def run(passes):
        optimizer = EnergyOptimizer(
            [EnergySource("fuel", "fuel", 100.0), EnergySource("battery", "battery", 60.0)],
            [EnergyConsumptionUnit("engine", "engine", 10.0),
             EnergyConsumptionUnit("hydraulics", "hydraulics", 5.0)],
        )
        for _ in range(passes):
            optimizer.optimize()
        return optimizer.status()

    assert run(4) == run(4)


def test_status_frame(optimizer):
    frame = optimizer.status_frame()
    assert list(frame.columns) == ["role", "name", "kind", "value"]
    assert list(frame["role"]) == ["source", "source", "consumer", "consumer"]
    assert frame.loc[frame["name"] == "battery", "value"].iloc[0] == 100.0


def test_format_status(optimizer):
    optimizer.optimize()
    report = optimizer.format_status(pass_number=1)
    assert report.splitlines() == [
        "Energy status (pass 1)",
        "  Fuel level: 85.00",
        "  Battery level: 85.00",
        "  Engine rate: 10.00",
        "  Hydraulics rate: 5.00",
    ]


def test_history_frame(optimizer):
    assert optimizer.history_frame().empty

    optimizer.optimize()
    optimizer.optimize()
    frame = optimizer.history_frame()

    assert list(frame.index) == [1, 2]
    assert list(frame["fuel"]) == [85.0, 70.0]
    assert isinstance(frame, pd.DataFrame)


def test_duplicate_names_rejected():
    with pytest.raises(InvalidConfiguration, match="Duplicate"):
        EnergyOptimizer(
            [EnergySource("tank", "fuel", 1.0), EnergySource("tank", "battery", 1.0)],
            [],
        )


def test_empty_fleet_is_a_no_op():
    optimizer = EnergyOptimizer([], [])
    optimizer.optimize()
    assert optimizer.status() == []
    assert optimizer.last_exhausted == ()


def test_history_is_capped_at_limit():
    optimizer = EnergyOptimizer(
        [EnergySource("fuel", "fuel", 0.0)],
        [EnergyConsumptionUnit("engine", "engine", 10.0)],
        history_limit=100,
    )
    for _ in range(1000):
        optimizer.optimize()

    assert len(optimizer.history) == 100
    frame = optimizer.history_frame()
    assert len(frame) == 100
    assert frame.index[0] == 901
    assert frame.index[-1] == 1000


def test_history_limit_must_be_positive():
    with pytest.raises(InvalidConfiguration, match="history_limit"):
        EnergyOptimizer([], [], history_limit=0)


def test_consumer_without_sources_is_exhausted():
    optimizer = EnergyOptimizer([], [EnergyConsumptionUnit("engine", "engine", 10.0)])
    optimizer.optimize()
    assert optimizer.last_exhausted == ("engine",)
