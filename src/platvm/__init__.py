"""platvm - version manager for the platform's binary distribution."""

__version__ = "0.1.0"
