# File: validators/__init__.py
# Purpose: Output verification

from .structure_checker import StructureChecker

__all__ = [
    'StructureChecker',
]
