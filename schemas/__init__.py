"""Pydantic schemas for the inspection database."""

from .equipment import (
    EquipmentType,
    Severity,
    InspectionStatus,
    FailureType,
    Inspection,
    PipelineSpecs,
    PSVSpecs,
    PressureVesselSpecs,
    DrumSpecs,
    HeatExchangerSpecs,
    SpecSheet,
    Equipment,
    EquipmentSummary,
    SearchResult,
)

__all__ = [
    "EquipmentType",
    "Severity",
    "InspectionStatus",
    "FailureType",
    "Inspection",
    "PipelineSpecs",
    "PSVSpecs",
    "PressureVesselSpecs",
    "DrumSpecs",
    "HeatExchangerSpecs",
    "SpecSheet",
    "Equipment",
    "EquipmentSummary",
    "SearchResult",
]
