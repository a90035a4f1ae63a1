"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when an encounter cannot be turned into a battle state."""


class EncounterValidationError(ValueError):
    """Raised when rosters are malformed and a search cannot begin."""
