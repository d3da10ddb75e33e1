"""Outcome of an embedding generation request."""

from enum import StrEnum


class GenerationStatus(StrEnum):
    """Terminal states of the generation pipeline."""

    SKIPPED_DISABLED = "skipped_disabled"
    SKIPPED_UP_TO_DATE = "skipped_up_to_date"
    SKIPPED_MISSING = "skipped_missing"
    CLEARED = "cleared"
    REGENERATED = "regenerated"
