"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class RegistryError(ServiceError):
    """Raised when the package registry search cannot be completed."""
