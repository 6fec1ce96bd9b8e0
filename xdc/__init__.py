"""Dynamic casting between interfaces registered for a class; see xdc.casting."""

__version__ = "0.3.0"
__all__ = ["casting"]