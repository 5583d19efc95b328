"""
Contract Validation Module

Модуль для валидации JSON контрактов market model.
"""

from .validators import (
    ContractValidator,
    EvolutionSetupValidator,
    SchemaLoader,
    validate_evolution_setup,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EvolutionSetupValidator",
    # Functions
    "validate_evolution_setup",
]
