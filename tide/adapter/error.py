"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class SeedError(AdapterError):
    """Seed catalog could not be read or parsed."""

    pass
