"""Building blocks for translatable validation rules on Python objects."""

__version__ = "1.0.0"