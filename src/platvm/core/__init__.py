"""Core models, errors and logging helpers shared across platvm."""
