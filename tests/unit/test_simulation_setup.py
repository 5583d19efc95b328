"""
Тесты для build_simulation_setup

Проверяет сборку EvolutionDescription и numeraires из evolution_setup payload:
1. Генерация по measure (по умолчанию terminal)
2. Явные numeraires → check_compatibility
3. Распознавание меры итогового assignment
4. Ошибки контракта и инвариантов доходят до вызывающего кода
"""

import dataclasses

import pytest
from jsonschema import ValidationError

from src.core.domain import (
    EvolutionDescription,
    NumeraireExpired,
    OrderingViolation,
    StructuralSizeMismatch,
)
from src.market_models import (
    MeasureSpec,
    NumeraireMeasure,
    SimulationSetup,
    build_simulation_setup,
)


@pytest.fixture
def payload():
    return {
        "schema_version": "1",
        "rate_times": [0.5, 1.0, 1.5, 2.0],
        "evolution_times": [0.25, 0.75, 1.2, 2.0],
    }


class TestBuildSimulationSetup:
    """Тесты build_simulation_setup"""

    def test_default_terminal(self, payload):
        setup = build_simulation_setup(payload)

        assert isinstance(setup, SimulationSetup)
        assert setup.evolution == EvolutionDescription(
            [0.5, 1.0, 1.5, 2.0], [0.25, 0.75, 1.2, 2.0]
        )
        assert setup.numeraires == (3, 3, 3, 3)
        assert setup.measure == MeasureSpec(kind=NumeraireMeasure.TERMINAL)

    def test_money_market(self, payload):
        payload["measure"] = {"kind": "money_market"}
        setup = build_simulation_setup(payload)
        assert setup.numeraires == (0, 1, 2, 3)
        assert setup.measure.kind is NumeraireMeasure.MONEY_MARKET

    def test_money_market_plus(self, payload):
        payload["measure"] = {"kind": "money_market_plus", "offset": 1}
        setup = build_simulation_setup(payload)
        assert setup.numeraires == (1, 2, 3, 3)
        assert setup.measure == MeasureSpec(
            kind=NumeraireMeasure.MONEY_MARKET_PLUS, offset=1
        )

    def test_explicit_numeraires(self, payload):
        payload["numeraires"] = [0, 2, 2, 3]
        setup = build_simulation_setup(payload)
        assert setup.numeraires == (0, 2, 2, 3)
        assert setup.measure is None

    def test_explicit_numeraires_recognised(self, payload):
        payload["numeraires"] = [0, 1, 2, 3]
        setup = build_simulation_setup(payload)
        assert setup.measure == MeasureSpec(kind=NumeraireMeasure.MONEY_MARKET)

    def test_default_evolution_times(self):
        setup = build_simulation_setup(
            {"schema_version": "1", "rate_times": [0.0, 1.0, 2.0, 3.0]}
        )
        assert setup.evolution.evolution_times == (0.0, 1.0, 2.0)
        assert setup.numeraires == (3, 3, 3)

    def test_relevance_rates(self, payload):
        payload["relevance_rates"] = [[0, 3], [0, 3], [1, 3], [2, 3]]
        setup = build_simulation_setup(payload)
        assert setup.evolution.relevance_rates == ((0, 3), (0, 3), (1, 3), (2, 3))

    def test_expired_numeraire(self, payload):
        payload["numeraires"] = [0, 0, 3, 3]
        with pytest.raises(NumeraireExpired, match="2nd step"):
            build_simulation_setup(payload)

    def test_numeraire_count(self, payload):
        payload["numeraires"] = [3, 3]
        with pytest.raises(StructuralSizeMismatch):
            build_simulation_setup(payload)

    def test_invalid_evolution(self, payload):
        payload["evolution_times"] = [0.25, 0.25, 1.2, 2.0]
        with pytest.raises(OrderingViolation):
            build_simulation_setup(payload)

    def test_evolution_times_before_origin(self, payload):
        payload["evolution_times"] = [-0.5, 0.25, 0.75, 2.0]
        setup = build_simulation_setup(payload)
        assert setup.evolution.first_alive_rate == (0, 0, 0, 1)
        assert setup.numeraires == (3, 3, 3, 3)

    def test_contract_violation(self, payload):
        payload["rate_times"] = "0.5, 1.0"
        with pytest.raises(ValidationError):
            build_simulation_setup(payload)

    def test_frozen(self, payload):
        setup = build_simulation_setup(payload)
        with pytest.raises(dataclasses.FrozenInstanceError):
            setup.numeraires = (0, 0, 0, 0)
