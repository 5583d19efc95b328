"""Numeraire measures — генерация и распознавание numeraire assignments.

Поддерживаемые меры:
- TERMINAL: каждый шаг дисконтируется последним zero-coupon bond (индекс n)
- MONEY_MARKET: на шаге i — первый bond, не истёкший к evolution_times[i]
- MONEY_MARKET_PLUS(offset): money market со сдвигом индекса на offset,
  ограниченным сверху n

Все функции чистые: EvolutionDescription не изменяется, результат —
новый список, принадлежащий вызывающему коду.

Индекс money-market bond ищется two-pointer scan'ом
(src.core.math.sorted_scan): обе сетки отсортированы, курсор по rate times
никогда не сбрасывается.
"""

import logging
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field, model_validator

from src.core.domain.evolution import EvolutionDescription, RangeExceeded
from src.core.math.sorted_scan import first_index_at_or_above

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS & CONFIG
# =============================================================================


class NumeraireMeasure(str, Enum):
    """Тип numeraire measure."""

    TERMINAL = "terminal"
    MONEY_MARKET = "money_market"
    MONEY_MARKET_PLUS = "money_market_plus"


class MeasureSpec(BaseModel):
    """Конфигурация меры: тип и offset (только для MONEY_MARKET_PLUS)."""

    kind: NumeraireMeasure = Field(..., description="Тип numeraire measure")
    offset: int = Field(default=0, ge=0, description="Сдвиг индекса numeraire")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_offset_kind(self) -> "MeasureSpec":
        if self.offset != 0 and self.kind != NumeraireMeasure.MONEY_MARKET_PLUS:
            raise ValueError(
                f"offset {self.offset} is only allowed for "
                f"{NumeraireMeasure.MONEY_MARKET_PLUS.value}, got kind {self.kind.value}"
            )
        return self


# =============================================================================
# HELPERS
# =============================================================================


def _max_numeraire(evolution: EvolutionDescription) -> int:
    return len(evolution.rate_times) - 1


def _check_offset(offset: int, max_numeraire: int) -> None:
    if offset < 0:
        raise RangeExceeded(f"offset ({offset}) must be non negative")
    if offset > max_numeraire:
        raise RangeExceeded(
            f"offset ({offset}) is greater than the max allowed value "
            f"for numeraire ({max_numeraire})"
        )


def _money_market_plus(evolution: EvolutionDescription, offset: int) -> list[int]:
    max_numeraire = _max_numeraire(evolution)
    _check_offset(offset, max_numeraire)
    money_market = first_index_at_or_above(evolution.rate_times, evolution.evolution_times)
    return [min(j + offset, max_numeraire) for j in money_market]


# =============================================================================
# TERMINAL MEASURE
# =============================================================================


def terminal_measure(evolution: EvolutionDescription) -> list[int]:
    """Terminal measure: [n] * steps."""
    return [_max_numeraire(evolution)] * evolution.number_of_steps()


def is_in_terminal_measure(
    evolution: EvolutionDescription,
    numeraires: Sequence[int],
) -> bool:
    """True если минимальный numeraire равен n.

    Terminal measure — единственный assignment, у которого даже наименьший
    элемент уже максимальный индекс. Пустой вектор → False.
    """
    if len(numeraires) == 0:
        return False
    return min(numeraires) == _max_numeraire(evolution)


# =============================================================================
# MONEY MARKET (PLUS) MEASURE
# =============================================================================


def money_market_plus_measure(evolution: EvolutionDescription, offset: int) -> list[int]:
    """Money-market-plus measure.

    numeraires[i] = min(j_i + offset, n), где j_i — наименьший индекс с
    rate_times[j_i] >= evolution_times[i].

    Args:
        evolution: описание эволюции
        offset: сдвиг индекса, 0 <= offset <= n

    Returns:
        Список из number_of_steps() индексов

    Raises:
        RangeExceeded: offset вне [0, n]
    """
    numeraires = _money_market_plus(evolution, offset)
    logger.debug("money_market_plus_measure(offset=%d) -> %s", offset, numeraires)
    return numeraires


def is_in_money_market_plus_measure(
    evolution: EvolutionDescription,
    numeraires: Sequence[int],
    offset: int,
) -> bool:
    """True если numeraires совпадает с money_market_plus_measure(evolution, offset).

    Сравниваются все шаги (без раннего выхода). Несовпадение длины → False.

    Raises:
        RangeExceeded: offset вне [0, n]
    """
    expected = _money_market_plus(evolution, offset)
    if len(numeraires) != len(expected):
        return False
    matches = [actual == wanted for actual, wanted in zip(numeraires, expected)]
    return all(matches)


def money_market_measure(evolution: EvolutionDescription) -> list[int]:
    """Money market measure (offset 0)."""
    return money_market_plus_measure(evolution, 0)


def is_in_money_market_measure(
    evolution: EvolutionDescription,
    numeraires: Sequence[int],
) -> bool:
    """Проверка money market measure (offset 0)."""
    return is_in_money_market_plus_measure(evolution, numeraires, 0)


# =============================================================================
# CONFIG DISPATCH & CLASSIFICATION
# =============================================================================


def numeraires_for(evolution: EvolutionDescription, spec: MeasureSpec) -> list[int]:
    """Генерация numeraires по конфигурации меры."""
    if spec.kind == NumeraireMeasure.TERMINAL:
        return terminal_measure(evolution)
    if spec.kind == NumeraireMeasure.MONEY_MARKET:
        return money_market_measure(evolution)
    return money_market_plus_measure(evolution, spec.offset)


def identify_measure(
    evolution: EvolutionDescription,
    numeraires: Sequence[int],
) -> MeasureSpec | None:
    """Распознавание меры, которой соответствует numeraires.

    Порядок проверок:
    1. TERMINAL
    2. MONEY_MARKET
    3. MONEY_MARKET_PLUS с наименьшим подходящим offset в 1..n

    Returns:
        MeasureSpec или None, если assignment не принадлежит ни одной мере
    """
    if is_in_terminal_measure(evolution, numeraires):
        return MeasureSpec(kind=NumeraireMeasure.TERMINAL)
    if is_in_money_market_measure(evolution, numeraires):
        return MeasureSpec(kind=NumeraireMeasure.MONEY_MARKET)
    for offset in range(1, _max_numeraire(evolution) + 1):
        if is_in_money_market_plus_measure(evolution, numeraires, offset):
            return MeasureSpec(kind=NumeraireMeasure.MONEY_MARKET_PLUS, offset=offset)
    return None
