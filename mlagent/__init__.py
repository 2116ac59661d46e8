"""ML Agent — keeps the on-device ML artifact registry in sync with resource packages."""

__version__ = "0.1.0"
