"""Inspection record set and its query surface."""

from .generator import generate_inspection_dataset
from .inspection_store import InspectionStore

__all__ = ["generate_inspection_dataset", "InspectionStore"]
