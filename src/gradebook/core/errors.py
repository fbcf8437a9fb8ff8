class InvalidInput(ValueError):
    """Raised when a caller breaks a basic contract, e.g. passes None for a list."""
