"""Simulation setup — сборка EvolutionDescription и numeraires из контракта.

Порядок:
1. Валидация payload по JSON Schema evolution_setup
2. Создание EvolutionDescription (проверяет собственные инварианты)
3. numeraires из payload → check_compatibility,
   иначе генерация по measure (по умолчанию terminal)
4. Распознавание меры итогового assignment
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.contracts.validators import validate_evolution_setup
from src.core.domain.evolution import EvolutionDescription
from src.market_models.compatibility import check_compatibility
from src.market_models.measures import (
    MeasureSpec,
    NumeraireMeasure,
    identify_measure,
    numeraires_for,
)

logger = logging.getLogger(__name__)

DEFAULT_MEASURE = MeasureSpec(kind=NumeraireMeasure.TERMINAL)


@dataclass(frozen=True)
class SimulationSetup:
    """Готовые к передаче в симулятор описание эволюции и numeraires."""

    evolution: EvolutionDescription
    numeraires: tuple[int, ...]

    # Мера итогового assignment, None для произвольного совместимого assignment
    measure: Optional[MeasureSpec]


def build_simulation_setup(payload: Dict[str, Any]) -> SimulationSetup:
    """Сборка SimulationSetup из evolution_setup payload.

    Args:
        payload: dict по схеме contracts/schema/evolution_setup.json

    Returns:
        SimulationSetup

    Raises:
        jsonschema.ValidationError: payload не соответствует контракту
        MarketModelError: нарушены инварианты эволюции или numeraires
    """
    validate_evolution_setup(payload)

    evolution = EvolutionDescription(
        payload["rate_times"],
        payload.get("evolution_times", ()),
        [tuple(pair) for pair in payload.get("relevance_rates", ())],
    )

    if "numeraires" in payload:
        numeraires = list(payload["numeraires"])
        check_compatibility(evolution, numeraires)
    else:
        spec = MeasureSpec(**payload["measure"]) if "measure" in payload else DEFAULT_MEASURE
        numeraires = numeraires_for(evolution, spec)

    measure = identify_measure(evolution, numeraires)
    logger.info(
        "Simulation setup: %d rates, %d steps, measure %s",
        evolution.number_of_rates(),
        evolution.number_of_steps(),
        measure.kind.value if measure is not None else "custom",
    )
    return SimulationSetup(
        evolution=evolution,
        numeraires=tuple(numeraires),
        measure=measure,
    )
