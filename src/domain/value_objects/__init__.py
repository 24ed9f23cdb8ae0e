"""Domain value objects."""
from src.domain.value_objects.percentage import Percentage

__all__ = [
    "Percentage",
]
