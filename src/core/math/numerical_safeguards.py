"""
Numerical Safeguards — примитивы проверки временных сеток

Модуль содержит проверки, общие для всех временных последовательностей
market model (rate times, evolution times):
- Строгая монотонность с указанием первого нарушающего индекса
- Поэлементные разности (accrual periods)
- Read-only массивы для неизменяемых производных данных

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сравнения времён точные (без epsilon): граница rate time == evolution time
   значима для expiry numeraire и first alive rate
2. Функции не мутируют входные последовательности
3. NaN никогда не проходит проверку монотонности
"""

from typing import Final, Sequence

import numpy as np

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Начало отсчёта модельного времени (годы от даты оценки)
TIME_ORIGIN: Final[float] = 0.0

# Минимальное количество точек в последовательности rate times (n >= 1 ставка)
MIN_RATE_TIMES: Final[int] = 2


# =============================================================================
# МОНОТОННОСТЬ
# =============================================================================


def first_non_increasing_index(values: Sequence[float]) -> int | None:
    """
    Поиск первого нарушения строгой монотонности.

    Args:
        values: Последовательность времён

    Returns:
        Наименьший индекс i >= 1, для которого values[i] <= values[i-1]
        (или сравнение с NaN), либо None если последовательность строго возрастает

    Examples:
        >>> first_non_increasing_index([0.0, 1.0, 2.0]) is None
        True
        >>> first_non_increasing_index([0.0, 1.0, 1.0, 2.0])
        2
        >>> first_non_increasing_index([0.5, 0.25])
        1
    """
    for i in range(1, len(values)):
        # not (a > b) ловит и NaN
        if not values[i] > values[i - 1]:
            return i
    return None


# =============================================================================
# РАЗНОСТИ
# =============================================================================


def consecutive_differences(values: Sequence[float]) -> np.ndarray:
    """
    Разности соседних элементов: out[i] = values[i+1] - values[i].

    Args:
        values: Последовательность длины m

    Returns:
        Новый float64 массив длины max(m - 1, 0)

    Examples:
        >>> consecutive_differences([0.0, 0.5, 1.5]).tolist()
        [0.5, 1.0]
    """
    return np.diff(np.asarray(values, dtype=np.float64))


def read_only(array: np.ndarray) -> np.ndarray:
    """Запрет записи в массив (in-place) и возврат того же объекта."""
    array.setflags(write=False)
    return array
