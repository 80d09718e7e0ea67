"""Seeded, deterministic case generation."""

from .case_generator import (
    CaseGenerationError,
    CaseGeneratorConfig,
    Difficulty,
    generate_case,
)
from .random import RandomSource, create_random
from .suspects import SuspectCountError

__all__ = [
    "CaseGenerationError",
    "CaseGeneratorConfig",
    "Difficulty",
    "RandomSource",
    "SuspectCountError",
    "create_random",
    "generate_case",
]
