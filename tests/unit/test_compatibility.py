"""
Тесты для check_compatibility

Проверяет:
1. Совместимые assignments проходят (включая границу rate time == evolution time)
2. Истёкший numeraire → NumeraireExpired с номером шага и значениями
3. Последний шаг не проверяется на expiry
4. Несовпадение размера и индекс вне диапазона
"""

import logging

import numpy as np
import pytest

from src.core.domain import (
    EvolutionDescription,
    NumeraireExpired,
    RangeExceeded,
    StructuralSizeMismatch,
)
from src.market_models import (
    check_compatibility,
    money_market_measure,
    money_market_plus_measure,
    terminal_measure,
)
from src.market_models.compatibility import ordinal


# =============================================================================
# ORDINAL
# =============================================================================


class TestOrdinal:
    """Порядковые числительные в сообщениях об ошибках"""

    @pytest.mark.parametrize(
        "n, expected",
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (101, "101st"),
            (111, "111th"),
        ],
    )
    def test_ordinal(self, n, expected):
        assert ordinal(n) == expected


# =============================================================================
# CHECK COMPATIBILITY
# =============================================================================


class TestCheckCompatibility:
    """Тесты check_compatibility"""

    def test_boundary_passes(self):
        """rate time 0 >= evolution time 0 — numeraire ещё жив."""
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.0, 1.0])
        assert check_compatibility(ev, [0, 2]) is None

    def test_expired_first_step(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [1.0, 2.0])
        with pytest.raises(NumeraireExpired) as exc_info:
            check_compatibility(ev, [0, 2])

        message = str(exc_info.value)
        assert "1st step" in message
        assert "evolution time 1.0" in message
        assert "numeraire (0)" in message
        assert "rate time 0.0" in message

    def test_expired_second_step(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0, 3.0], [0.5, 1.5, 3.0])
        with pytest.raises(NumeraireExpired, match="2nd step"):
            check_compatibility(ev, [3, 1, 3])

    def test_last_step_exempt(self):
        """Последний шаг не проверяется на expiry."""
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 2.0])
        check_compatibility(ev, [1, 1])

    def test_size_mismatch(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        with pytest.raises(StructuralSizeMismatch, match=r"numeraires \(1\).*evolution times \(2\)"):
            check_compatibility(ev, [2])

    @pytest.mark.parametrize("bad", [-1, 3, 10])
    def test_index_out_of_range(self, bad):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        with pytest.raises(RangeExceeded, match=r"\[0, 2\]"):
            check_compatibility(ev, [2, bad])

    @pytest.mark.parametrize("bad", [1.0, True, "1"])
    def test_non_integer_index(self, bad):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        with pytest.raises(RangeExceeded, match="integer index"):
            check_compatibility(ev, [bad, 2])

    def test_numpy_integer_index(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        check_compatibility(ev, np.array([1, 2]))

    def test_input_not_mutated(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        numeraires = [1, 2]
        check_compatibility(ev, numeraires)
        assert numeraires == [1, 2]

    def test_accepts_tuple(self):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [0.5, 1.5])
        check_compatibility(ev, (2, 2))

    def test_expiry_logged(self, caplog):
        ev = EvolutionDescription([0.0, 1.0, 2.0], [1.0, 2.0])
        with caplog.at_level(logging.WARNING, logger="src.market_models.compatibility"):
            with pytest.raises(NumeraireExpired):
                check_compatibility(ev, [0, 2])
        assert any("expired" in record.getMessage() for record in caplog.records)


class TestGeneratedMeasuresCompatible:
    """Сгенерированные меры всегда совместимы."""

    @pytest.mark.parametrize(
        "rate_times, evolution_times",
        [
            ([0.0, 1.0, 2.0, 3.0], []),
            ([0.5, 1.0, 1.5, 2.0], [0.25, 0.75, 1.2, 2.0]),
            ([0.25, 0.5, 0.75, 1.0, 1.25], [0.1, 0.6, 0.9]),
        ],
    )
    def test_compatible(self, rate_times, evolution_times):
        ev = EvolutionDescription(rate_times, evolution_times)
        check_compatibility(ev, terminal_measure(ev))
        check_compatibility(ev, money_market_measure(ev))
        for offset in range(ev.number_of_rates() + 1):
            check_compatibility(ev, money_market_plus_measure(ev, offset))
