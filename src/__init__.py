"""
Product catalog and discount service source code
"""
from . import config
from . import exceptions

__all__ = [
    'config',
    'exceptions',
]
