"""
Configuration type definitions for krelay-gamedata.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
