"""Custom exception hierarchy for tower planning."""


class TowerError(Exception):
    """Base exception for planner failures."""


class VocabularyError(TowerError):
    """Raised when a word id or word entry is unusable."""


class PlacementError(TowerError):
    """Raised when a placement cannot be written into the volume at all."""


class ValidationError(TowerError):
    """Raised internally when a tower breaks a structural rule."""
