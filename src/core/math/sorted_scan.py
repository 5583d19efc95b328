"""
Sorted Scan — two-pointer merge двух отсортированных последовательностей

Для каждого запроса q из неубывающей последовательности queries ищется
наименьший индекс i в возрастающей сетке grid такой, что:
- grid[i] >= q  (inclusive, money-market numeraire)
- grid[i] > q   (strict, first alive rate)

Курсор по grid только продвигается и никогда не сбрасывается, поэтому
полный проход стоит O(len(grid) + len(queries)).

Если подходящего индекса нет, возвращается len(grid).
"""

from typing import Sequence


def merge_index_scan(
    grid: Sequence[float],
    queries: Sequence[float],
    inclusive: bool,
) -> list[int]:
    """
    Отображение каждого запроса в индекс первой точки сетки за ним.

    Args:
        grid: Строго возрастающая сетка (например, rate times)
        queries: Неубывающие запросы (например, evolution times)
        inclusive: True → первая точка grid[i] >= q, False → grid[i] > q

    Returns:
        Список индексов той же длины, что и queries (неубывающий)

    Raises:
        ValueError: Если queries убывает (курсор не может откатиться)

    Examples:
        >>> merge_index_scan([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 2.0], inclusive=True)
        [0, 1, 2]
        >>> merge_index_scan([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 2.0], inclusive=False)
        [1, 2, 3]
    """
    size = len(grid)
    indices: list[int] = []
    cursor = 0
    previous = None

    for step, query in enumerate(queries):
        if previous is not None and query < previous:
            raise ValueError(
                f"queries must be non-decreasing: queries[{step}]={query} "
                f"< queries[{step - 1}]={previous}"
            )
        if inclusive:
            while cursor < size and grid[cursor] < query:
                cursor += 1
        else:
            while cursor < size and grid[cursor] <= query:
                cursor += 1
        indices.append(cursor)
        previous = query

    return indices


def first_index_at_or_above(grid: Sequence[float], queries: Sequence[float]) -> list[int]:
    """Для каждого q: min{i : grid[i] >= q}."""
    return merge_index_scan(grid, queries, inclusive=True)


def first_index_above(grid: Sequence[float], queries: Sequence[float]) -> list[int]:
    """Для каждого q: min{i : grid[i] > q}."""
    return merge_index_scan(grid, queries, inclusive=False)
