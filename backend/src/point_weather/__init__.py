"""Point Weather - exact and climatology weather for a map point, date and hour."""

__version__ = "0.1.0"
