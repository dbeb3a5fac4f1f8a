class RegistryError(Exception):
    """Base exception for all registry errors."""


class ConfigError(RegistryError):
    """Invalid or missing configuration."""


class ValidationError(RegistryError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class NotFoundError(RegistryError):
    def __init__(self, network_id, resource: str = "Network"):
        self.network_id = network_id
        self.resource = resource
        super().__init__(f"{resource} with id '{network_id}' not found")


class ConflictError(RegistryError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UnauthorizedError(RegistryError):
    def __init__(self, reason: str = "Unauthorized"):
        self.reason = reason
        super().__init__(reason)


class StorageError(RegistryError):
    """Lower-layer storage fault. The original exception is chained, never exposed."""

    def __init__(self, reason: str = "storage operation failed"):
        self.reason = reason
        super().__init__(reason)
