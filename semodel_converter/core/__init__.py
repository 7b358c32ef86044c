# -*- coding: utf-8 -*-
# File: core/__init__.py
# Purpose: Core module

"""
semodel-converter core
Data model, errors, numeric encodings, file IO and input validation
"""

__all__ = [
    'schema',
    'errors',
    'utils',
    'validator',
    'formats',
    'io',
]
