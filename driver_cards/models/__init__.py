"""Domain models for the driver card importer.

Field keys, extracted contributor records, extraction results, saved card
sets and warning log records.
"""

from .card_set import SavedCardSet
from .contributor import ContributorRecord
from .extraction_result import ExtractionResult
from .field_key import FIELD_LABELS, MANDATORY_FIELDS, SENTINEL, FieldKey
from .warning_record import WarningRecord

__all__ = [
    # Field vocabulary
    "FieldKey",
    "FIELD_LABELS",
    "MANDATORY_FIELDS",
    "SENTINEL",
    # Extraction models
    "ContributorRecord",
    "ExtractionResult",
    # Persistence / logging models
    "SavedCardSet",
    "WarningRecord",
]
