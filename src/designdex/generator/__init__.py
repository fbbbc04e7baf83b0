"""Code generation and framework detection for stored patterns."""

from designdex.generator.code import generate_code, to_pascal_case
from designdex.generator.detector import FRAMEWORK_PACKAGES, detect_framework

__all__ = [
    "FRAMEWORK_PACKAGES",
    "detect_framework",
    "generate_code",
    "to_pascal_case",
]
