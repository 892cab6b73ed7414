"""Equipment and inspection record schemas."""

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Frozen base model serialized with camelCase keys."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class EquipmentType(str, Enum):
    """Equipment categories in the inspection database."""
    PIPELINE = "Pipeline"
    PSV = "PSV"
    PRESSURE_VESSEL = "Pressure Vessel"
    DRUM = "Drum"
    HEAT_EXCHANGER = "Heat Exchanger"


class Severity(str, Enum):
    """Criticality of an inspection finding."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Ordinal position, Low=0 through Critical=3."""
        return list(Severity).index(self)


class InspectionStatus(str, Enum):
    """Workflow status of an inspection."""
    OPEN = "Open"
    CLOSED = "Closed"
    IN_PROGRESS = "In Progress"


class FailureType(str, Enum):
    """Failure classification for open findings."""
    CRITICAL = "Critical"
    NORMAL = "Normal"


class Inspection(RecordModel):
    """A single inspection report."""
    id: str
    date: date
    inspector: str
    findings: str
    recommendations: str
    severity: Severity
    report_url: str
    status: InspectionStatus
    failure_type: Optional[FailureType] = None


# Type-specific spec sheets, tagged by equipment type

class PipelineSpecs(RecordModel):
    equipment_type: Literal[EquipmentType.PIPELINE] = EquipmentType.PIPELINE
    nominal_diameter_in: float
    material: str
    length_m: float
    service: str


class PSVSpecs(RecordModel):
    equipment_type: Literal[EquipmentType.PSV] = EquipmentType.PSV
    set_pressure_psig: float
    orifice: str  # API 526 letter designation
    inlet_size_in: float


class PressureVesselSpecs(RecordModel):
    equipment_type: Literal[EquipmentType.PRESSURE_VESSEL] = EquipmentType.PRESSURE_VESSEL
    design_pressure_psig: float
    design_temperature_f: float
    material: str
    orientation: str


class DrumSpecs(RecordModel):
    equipment_type: Literal[EquipmentType.DRUM] = EquipmentType.DRUM
    capacity_m3: float
    design_pressure_psig: float
    service: str


class HeatExchangerSpecs(RecordModel):
    equipment_type: Literal[EquipmentType.HEAT_EXCHANGER] = EquipmentType.HEAT_EXCHANGER
    tema_type: str
    tube_count: int
    shell_material: str
    duty_mmbtu_hr: float


SpecSheet = Annotated[
    Union[PipelineSpecs, PSVSpecs, PressureVesselSpecs, DrumSpecs, HeatExchangerSpecs],
    Field(discriminator="equipment_type"),
]


class Equipment(RecordModel):
    """A piece of equipment with its inspection history (most recent first)."""
    id: str
    name: str
    equipment_type: EquipmentType = Field(alias="type")
    location: str
    inspections: tuple[Inspection, ...] = ()
    specs: Optional[SpecSheet] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "Equipment":
        dates = [ins.date for ins in self.inspections]
        if any(later > earlier for earlier, later in zip(dates, dates[1:])):
            raise ValueError(f"Inspections for {self.id} must be ordered most recent first")
        if self.specs is not None and self.specs.equipment_type != self.equipment_type:
            raise ValueError(
                f"Spec sheet for {self.id} is {self.specs.equipment_type.value}, "
                f"expected {self.equipment_type.value}"
            )
        return self

    def summary(self) -> "EquipmentSummary":
        """Get the list-view summary of this equipment."""
        return EquipmentSummary(
            id=self.id,
            name=self.name,
            equipment_type=self.equipment_type,
            location=self.location,
        )


class EquipmentSummary(RecordModel):
    """Equipment list entry without inspections."""
    id: str
    name: str
    equipment_type: EquipmentType = Field(alias="type")
    location: str


class SearchResult(RecordModel):
    """A single inspection matched by a findings search."""
    equipment_name: str
    date: date
    finding: str
    severity: Severity
    report_url: str
