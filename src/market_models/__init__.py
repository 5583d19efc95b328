"""Market models — numeraire measures и совместимость с EvolutionDescription.

- Проверка numeraire assignment против описания эволюции
- Terminal / money market / money-market-plus меры: генерация и распознавание
- Сборка описания эволюции и numeraires из JSON контракта
"""

from .compatibility import check_compatibility
from .measures import (
    MeasureSpec,
    NumeraireMeasure,
    identify_measure,
    is_in_money_market_measure,
    is_in_money_market_plus_measure,
    is_in_terminal_measure,
    money_market_measure,
    money_market_plus_measure,
    numeraires_for,
    terminal_measure,
)
from .simulation_setup import SimulationSetup, build_simulation_setup

__all__ = [
    "check_compatibility",
    "MeasureSpec",
    "NumeraireMeasure",
    "identify_measure",
    "is_in_money_market_measure",
    "is_in_money_market_plus_measure",
    "is_in_terminal_measure",
    "money_market_measure",
    "money_market_plus_measure",
    "numeraires_for",
    "terminal_measure",
    "SimulationSetup",
    "build_simulation_setup",
]
