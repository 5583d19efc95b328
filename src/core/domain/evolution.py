"""
EvolutionDescription — временная структура market model симуляции

Immutable Pydantic модель, описывающая связь между:
- rate times (границы tenor'ов n форвардных ставок, n + 1 точка)
- evolution times (границы шагов Monte-Carlo симуляции)
- relevance rates (диапазон ставок, релевантных каждому шагу)

Производные данные вычисляются один раз при создании:
- rate_taus: accrual periods tau[i] = rate_times[i+1] - rate_times[i]
- effective_stop_time: матрица steps × n, stop[j, i] = min(evolution_times[j], rate_times[i])
- first_alive_rate: для шага j первая ставка, не истёкшая к началу шага

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rate_times: >= 2 точек, rate_times[0] >= 0, строго возрастают
2. evolution_times: >= 1 точки, строго возрастают, последняя <= последнего rate time
3. relevance_rates: ровно одна пара на шаг
4. first_alive_rate не убывает по шагам (истёкшая ставка остаётся истёкшей)
5. После создания объект не изменяется (frozen, read-only массивы)
"""

import logging
from typing import Annotated, Any

import numpy as np
from pydantic import BaseModel, Field, PrivateAttr, model_validator

from src.core.math.numerical_safeguards import (
    MIN_RATE_TIMES,
    TIME_ORIGIN,
    consecutive_differences,
    first_non_increasing_index,
    read_only,
)
from src.core.math.sorted_scan import first_index_above

logger = logging.getLogger(__name__)

# Время в годах; NaN/Inf отвергаются на уровне pydantic
Time = Annotated[float, Field(allow_inf_nan=False)]


def _as_list(value: Any) -> list | None:
    """list/tuple/numpy → list; None и не-итерируемые значения → None."""
    if value is None or isinstance(value, (str, bytes, dict)):
        return None
    if isinstance(value, np.ndarray):
        return value.ravel().tolist()
    try:
        return list(value)
    except TypeError:
        return None


def _none_to_empty(value: Any) -> Any:
    return () if value is None else value


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MarketModelError(Exception):
    """
    Базовое нарушение предусловий market model.

    Не наследует ValueError: pydantic превращает ValueError из валидаторов в
    ValidationError, а эти ошибки должны доходить до вызывающего кода как есть.
    """


class StructuralSizeMismatch(MarketModelError):
    """Несовпадение длин (relevance rates, numeraires) с числом шагов/ставок."""


class OrderingViolation(MarketModelError):
    """Времена не строго возрастают или первый rate time отрицателен."""


class RangeExceeded(MarketModelError):
    """Значение за допустимой границей (последний evolution time, offset, индекс)."""


class NumeraireExpired(MarketModelError):
    """Numeraire истёк раньше конца шага, который его использует."""


# =============================================================================
# EVOLUTION DESCRIPTION
# =============================================================================


class EvolutionDescription(BaseModel):
    """
    Описание эволюции market model.

    Immutable модель (frozen=True): все производные поля вычисляются в
    model_post_init и доступны только через read-only свойства.

    Examples:
        >>> ev = EvolutionDescription([0.0, 1.0, 2.0, 3.0])
        >>> ev.evolution_times
        (0.0, 1.0, 2.0)
        >>> ev.first_alive_rate
        (1, 1, 2)
    """

    rate_times: tuple[Time, ...] = Field(
        ..., description="Границы tenor'ов форвардных ставок (n + 1 точка)"
    )
    evolution_times: tuple[Time, ...] = Field(
        default=(), description="Границы шагов симуляции (по умолчанию rate_times[:-1])"
    )
    relevance_rates: tuple[tuple[int, int], ...] = Field(
        default=(), description="Пара (first, last) релевантных ставок на шаг"
    )

    model_config = {"frozen": True}  # Immutable

    _rate_taus: np.ndarray = PrivateAttr()
    _effective_stop_time: np.ndarray = PrivateAttr()
    _first_alive_rate: tuple[int, ...] = PrivateAttr()

    def __init__(
        self,
        rate_times: Any,
        evolution_times: Any = (),
        relevance_rates: Any = (),
        **data: Any,
    ) -> None:
        super().__init__(
            rate_times=rate_times,
            evolution_times=evolution_times,
            relevance_rates=relevance_rates,
            **data,
        )

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        """
        Значения по умолчанию для пустых evolution_times и relevance_rates.

        - evolution_times = rate_times[:-1] (шаг заканчивается на каждой
          промежуточной границе tenor'а)
        - relevance_rates = (0, n) для каждого шага
        """
        if not isinstance(data, dict):
            return data

        rate_times = _as_list(data.get("rate_times"))
        evolution_times = _as_list(_none_to_empty(data.get("evolution_times")))
        relevance_rates = _as_list(_none_to_empty(data.get("relevance_rates")))
        if rate_times is None or evolution_times is None or relevance_rates is None:
            # Ошибку типа сообщит pydantic
            return data

        if not evolution_times:
            evolution_times = rate_times[:-1]
        if not relevance_rates:
            n_rates = max(len(rate_times) - 1, 0)
            relevance_rates = [(0, n_rates)] * len(evolution_times)

        return {
            **data,
            "rate_times": rate_times,
            "evolution_times": evolution_times,
            "relevance_rates": relevance_rates,
        }

    # -------------------------------------------------------------------------
    # Validation & derivation
    # -------------------------------------------------------------------------

    def model_post_init(self, __context: Any) -> None:
        self._check_rate_times()
        self._check_evolution_times()
        self._check_relevance_rates()

        rate_times = self.rate_times
        evolution_times = self.evolution_times

        self._rate_taus = read_only(consecutive_differences(rate_times))
        self._effective_stop_time = read_only(
            np.minimum.outer(
                np.asarray(evolution_times, dtype=np.float64),
                np.asarray(rate_times[:-1], dtype=np.float64),
            )
        )
        # Шаг j начинается в evolution_times[j-1], шаг 0 в начале отсчёта.
        # rate_times >= 0, поэтому отрицательное начало шага эквивалентно 0
        step_starts = (TIME_ORIGIN,) + tuple(
            max(TIME_ORIGIN, t) for t in evolution_times[:-1]
        )
        self._first_alive_rate = tuple(first_index_above(rate_times, step_starts))

        logger.debug(
            "EvolutionDescription built: %d rates, %d steps, first alive rates %s",
            self.number_of_rates(),
            self.number_of_steps(),
            self._first_alive_rate,
        )

    def _check_rate_times(self) -> None:
        rate_times = self.rate_times
        if len(rate_times) < MIN_RATE_TIMES:
            raise StructuralSizeMismatch(
                f"Rate times must have {MIN_RATE_TIMES} elements at least, "
                f"got {len(rate_times)}"
            )
        if rate_times[0] < TIME_ORIGIN:
            raise OrderingViolation(
                f"First rate time must be non negative, got {rate_times[0]}"
            )
        bad = first_non_increasing_index(rate_times)
        if bad is not None:
            raise OrderingViolation(
                f"Rate times must be strictly increasing: rate_times[{bad}]="
                f"{rate_times[bad]} <= rate_times[{bad - 1}]={rate_times[bad - 1]}"
            )

    def _check_evolution_times(self) -> None:
        evolution_times = self.evolution_times
        if len(evolution_times) == 0:
            raise StructuralSizeMismatch("Evolution times must have 1 element at least")
        bad = first_non_increasing_index(evolution_times)
        if bad is not None:
            raise OrderingViolation(
                f"Evolution times must be strictly increasing: evolution_times[{bad}]="
                f"{evolution_times[bad]} <= evolution_times[{bad - 1}]="
                f"{evolution_times[bad - 1]}"
            )
        if evolution_times[-1] > self.rate_times[-1]:
            raise RangeExceeded(
                f"The last evolution time ({evolution_times[-1]}) is past "
                f"the last rate time ({self.rate_times[-1]})"
            )

    def _check_relevance_rates(self) -> None:
        steps = len(self.evolution_times)
        if len(self.relevance_rates) != steps:
            raise StructuralSizeMismatch(
                f"Size mismatch between relevance rates ({len(self.relevance_rates)}) "
                f"and evolution times ({steps})"
            )
        n_rates = len(self.rate_times) - 1
        for step, (first, last) in enumerate(self.relevance_rates):
            if not 0 <= first <= last <= n_rates:
                raise RangeExceeded(
                    f"Relevance rates for step {step} must satisfy "
                    f"0 <= first <= last <= {n_rates}, got ({first}, {last})"
                )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def rate_taus(self) -> np.ndarray:
        """Accrual periods (read-only, длина n)."""
        return self._rate_taus

    @property
    def effective_stop_time(self) -> np.ndarray:
        """Матрица effective stop times (read-only, steps × n)."""
        return self._effective_stop_time

    @property
    def first_alive_rate(self) -> tuple[int, ...]:
        """Индекс первой живой ставки для каждого шага."""
        return self._first_alive_rate

    def number_of_rates(self) -> int:
        """Количество форвардных ставок n = len(rate_times) - 1."""
        return len(self.rate_times) - 1

    def number_of_steps(self) -> int:
        """Количество шагов эволюции."""
        return len(self.evolution_times)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def model_copy(
        self, *, update: dict[str, Any] | None = None, deep: bool = False
    ) -> "EvolutionDescription":
        """
        Копия с повторной валидацией.

        Все поля и массивы immutable, поэтому deep не влияет на результат.
        update проходит через конструктор: предусловия проверяются заново,
        производные данные пересчитываются.
        """
        return type(self)(**{**self.model_dump(), **(update or {})})

    def _key(self) -> tuple:
        return (self.rate_times, self.evolution_times, self.relevance_rates)

    def __eq__(self, other: object) -> bool:
        # Производные поля зависят только от входных, numpy массивы не сравниваются
        if not isinstance(other, EvolutionDescription):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())
