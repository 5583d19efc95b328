"""Compatibility — проверка numeraire assignment против EvolutionDescription.

Numeraire для шага i (zero-coupon bond с индексом numeraires[i]) не должен
истечь раньше конца шага: rate_times[numeraires[i]] >= evolution_times[i].
Последний шаг не проверяется: terminal numeraire может совпадать с последним
rate time.
"""

import logging
import numbers
from typing import Sequence

from src.core.domain.evolution import (
    EvolutionDescription,
    NumeraireExpired,
    RangeExceeded,
    StructuralSizeMismatch,
)

logger = logging.getLogger(__name__)


def ordinal(n: int) -> str:
    """Порядковое числительное: 1 → '1st', 2 → '2nd', 11 → '11th', 23 → '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def check_compatibility(
    evolution: EvolutionDescription,
    numeraires: Sequence[int],
) -> None:
    """Проверка, что numeraires совместимы с evolution.

    Args:
        evolution: описание эволюции
        numeraires: индекс numeraire bond для каждого шага

    Raises:
        StructuralSizeMismatch: len(numeraires) != number_of_steps()
        RangeExceeded: индекс numeraire не целый или вне [0, number_of_rates()]
        NumeraireExpired: numeraire истёк до конца своего шага
    """
    evolution_times = evolution.evolution_times
    rate_times = evolution.rate_times
    steps = len(evolution_times)
    max_numeraire = len(rate_times) - 1

    if len(numeraires) != steps:
        raise StructuralSizeMismatch(
            f"Size mismatch between numeraires ({len(numeraires)}) "
            f"and evolution times ({steps})"
        )

    for i, numeraire in enumerate(numeraires):
        # bool является подклассом int, но не индексом bond'а
        is_index = isinstance(numeraire, numbers.Integral) and not isinstance(
            numeraire, bool
        )
        if not is_index:
            raise RangeExceeded(
                f"{ordinal(i + 1)} step: the numeraire ({numeraire!r}) must be "
                f"an integer index in [0, {max_numeraire}]"
            )
        if not 0 <= numeraire <= max_numeraire:
            raise RangeExceeded(
                f"{ordinal(i + 1)} step: the numeraire ({numeraire}) is outside "
                f"the allowed range [0, {max_numeraire}]"
            )

    for i in range(steps - 1):
        numeraire = numeraires[i]
        if rate_times[numeraire] < evolution_times[i]:
            logger.warning(
                "Numeraire %d expired at step %d (rate time %s < evolution time %s)",
                numeraire,
                i,
                rate_times[numeraire],
                evolution_times[i],
            )
            raise NumeraireExpired(
                f"{ordinal(i + 1)} step, evolution time {evolution_times[i]}: "
                f"the numeraire ({numeraire}), corresponding to rate time "
                f"{rate_times[numeraire]}, is expired"
            )
