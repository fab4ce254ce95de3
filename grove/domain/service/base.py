"""Base service class for domain services."""


class Service:
    """Base class for Grove domain services.

    Services wrap repositories with validation, timestamps and logfire spans.
    """

    pass
