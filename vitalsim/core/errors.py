class ConfigurationError(ValueError):
    """Invalid engine configuration, rejected at construction time."""
