class InvalidInputError(ValueError):
    """
    Raised when a caller breaks the contract of a scheduling operation.

    Examples: an unknown answer difficulty, a day counter below 1, or a
    bucket map that is not a mapping. These are programming errors and
    are never retried or replaced with defaults.
    """
