class ConfigurationError(Exception):
    """
    An endpoint is wired wrong (unknown field, unsupported source, bad rule).

    Raised while building binders at startup, never for client input.
    """
