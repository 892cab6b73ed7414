"""Synthetic inspection record-set generator."""

import logging
from datetime import date
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from schemas.equipment import (
    DrumSpecs,
    Equipment,
    EquipmentType,
    FailureType,
    HeatExchangerSpecs,
    Inspection,
    InspectionStatus,
    PipelineSpecs,
    PressureVesselSpecs,
    PSVSpecs,
    Severity,
)

logger = logging.getLogger(__name__)


LOCATIONS = [
    "Unit 1 - Crude Distillation",
    "Unit 2 - Vacuum Distillation",
    "Unit 3 - Catalytic Cracker",
    "Unit 4 - Water Treatment",
    "Tank Farm A - Crude Storage",
    "Tank Farm B - Product Storage",
    "Interconnecting Pipeway",
    "Flare System",
    "Cooling Water Tower",
    "Boiler House",
]

INSPECTORS = [
    "J. Smith", "A. Doe", "R. Roe", "S. Connor", "B. Wayne",
    "C. Kent", "D. Prince", "L. Lane", "P. Parker", "T. Stark",
]

# (type, id code, name prefix)
CATEGORY_CONFIGS = [
    (EquipmentType.PIPELINE, "PL", "Pipeline"),
    (EquipmentType.PSV, "PSV", "PSV"),
    (EquipmentType.PRESSURE_VESSEL, "PV", "Vessel"),
    (EquipmentType.DRUM, "DR", "Drum"),
    (EquipmentType.HEAT_EXCHANGER, "HE", "Exchanger"),
]

SCENARIOS = [
    {
        "label": "Accepted",
        "status_pool": [InspectionStatus.CLOSED],
        "severity_pool": [Severity.LOW],
        "findings_pool": [
            "Vibration levels within ISO acceptable limits.",
            "No visible leaks observed during hydro test.",
            "External coating intact. No corrosion observed.",
            "Ultrasonic thickness readings above minimal nominal.",
            "Visual inspection passed. Housekeeping good.",
            "Pipe supports are in good condition and fully engaged.",
            "PSV pop test passed at set pressure.",
            "No signs of external blistering or lamination.",
            "Flange connections tight, no evidence of leakage.",
            "Insulation cladding is intact and weather-proof.",
            "Tube bundle inspection clean, no significant fouling.",
            "Pass partition plates intact and secure.",
            "Channel head internal lining in good condition.",
            "Sacrificial anodes show normal consumption rate.",
        ],
        "rec_pool": [
            "Continue routine monitoring schedule.",
            "No maintenance action required.",
            "Next inspection due in 12 months.",
            "Maintain current operating parameters.",
            "Record thickness readings in IDMS.",
            "Schedule next cleaning cycle.",
        ],
    },
    {
        "label": "Repaired",
        "status_pool": [InspectionStatus.CLOSED],
        "severity_pool": [Severity.MEDIUM, Severity.HIGH],
        "findings_pool": [
            "Seal leak previously detected has been repaired.",
            "Patch plate welded over corroded shell area. NDT passed.",
            "Replaced damaged pressure gauge.",
            "Tightened loose coupling bolts. Alignment verified.",
            "Replaced corroded valve stem.",
            "PSV spring washer replaced and re-certified.",
            "Pipe section replaced due to localized erosion.",
            "Repainted areas with coating failure.",
            "Replaced missing bolts on flange connection.",
            "Welded support bracket that was detached.",
            "Plugged 5 leaking tubes in the bundle.",
            "Replaced channel head gasket.",
            "Chemical cleaning performed to remove scale.",
            "Re-rolled tube-to-tubesheet joints.",
            "Installed impingement plate on inlet nozzle.",
        ],
        "rec_pool": [
            "Monitor repair for 48 hours.",
            "Repair completed successfully. Return to service.",
            "Log repair in maintenance history.",
            "Verify integrity during next shutdown.",
            "Perform IR scan within 24 hours of startup.",
        ],
    },
    {
        "label": "Pending for Repair",
        "status_pool": [InspectionStatus.OPEN, InspectionStatus.IN_PROGRESS],
        "severity_pool": [Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL],
        "findings_pool": [
            "Active product leak observed.",
            "High vibration (>0.5 in/s) detected during operation.",
            "Wall thickness below retirement limit (Tmin).",
            "Safety relief valve (PSV) failed pop test (lifted early).",
            "Severe pitting on shell (>40% wall loss).",
            "Structural cracks observed in support legs.",
            "Insulation damaged, causing significant heat loss.",
            "Severe external corrosion under insulation (CUI).",
            "Flange face damage requiring machining.",
            "Bellows expansion joint showing signs of fatigue cracking.",
            "Tube leak detected during pressure test.",
            "Severe fouling on shell side reducing heat transfer efficiency.",
            "Channel head showing signs of erosion-corrosion.",
            "Floating head backing ring cracked.",
            "Tubesheet ligament cracking observed.",
        ],
        "rec_pool": [
            "Plan for immediate replacement.",
            "Schedule outage for repair.",
            "Isolate equipment and perform detailed NDT.",
            "Reduce operating pressure by 20% until repair.",
            "Emergency work order created.",
            "Barricade area to prevent access.",
            "Order replacement tube bundle.",
            "Blind off nozzle until repair can be effected.",
        ],
    },
]

MIN_INSPECTIONS = 3
MAX_INSPECTIONS = 15
MONTHS_BETWEEN_INSPECTIONS = 4
REPORT_URL_TEMPLATE = "https://drive.google.com/open?id=report-{equipment_id}-{index}"


def generate_inspection_dataset(
    seed: Optional[int] = None,
    per_type: int = 50,
    reference_date: Optional[date] = None
) -> Tuple[Equipment, ...]:
    """
    Generate the synthetic equipment record set.

    Scenarios rotate Accepted / Repaired / Pending for Repair across each
    category so every category has an even mix of current states. The latest
    inspection reflects the scenario; older ones are closed Accepted or
    Repaired reports spaced roughly four months apart.

    Args:
        seed: Random seed (None for a non-reproducible record set)
        per_type: Number of equipment records per category
        reference_date: Date of the most recent inspection window (default: today)

    Returns:
        Immutable tuple of Equipment records
    """
    rng = np.random.default_rng(seed)
    reference = pd.Timestamp(reference_date or date.today())

    records: List[Equipment] = []
    for equipment_type, code, prefix in CATEGORY_CONFIGS:
        for i in range(1, per_type + 1):
            scenario = SCENARIOS[(i - 1) % len(SCENARIOS)]
            num = f"{i:03d}"
            equipment_id = f"EQ-{code}-{num}"

            inspection_count = int(rng.integers(MIN_INSPECTIONS, MAX_INSPECTIONS + 1))
            inspections = [
                _generate_inspection(rng, equipment_id, j, scenario, reference)
                for j in range(inspection_count)
            ]
            inspections.sort(key=lambda ins: ins.date, reverse=True)

            records.append(Equipment(
                id=equipment_id,
                name=f"{prefix}-{num}",
                equipment_type=equipment_type,
                location=_pick(rng, LOCATIONS),
                inspections=tuple(inspections),
                specs=_generate_specs(rng, equipment_type),
            ))

    logger.info(f"Generated {len(records)} equipment records (seed={seed})")
    return tuple(records)


def _pick(rng: np.random.Generator, pool):
    return pool[int(rng.integers(len(pool)))]


def _generate_inspection(
    rng: np.random.Generator,
    equipment_id: str,
    index: int,
    scenario: dict,
    reference: pd.Timestamp
) -> Inspection:
    """Generate the inspection at position `index` (0 = latest)."""
    is_latest = index == 0
    current = scenario if is_latest else SCENARIOS[int(rng.integers(2))]
    status = _pick(rng, current["status_pool"]) if is_latest else InspectionStatus.CLOSED

    when = (
        reference
        - pd.DateOffset(months=index * MONTHS_BETWEEN_INSPECTIONS)
        - pd.Timedelta(days=int(rng.integers(30)))
    ).date()

    severity = _pick(rng, current["severity_pool"])
    failure_type = None
    if status != InspectionStatus.CLOSED:
        failure_type = FailureType.CRITICAL if severity == Severity.CRITICAL else FailureType.NORMAL

    return Inspection(
        id=f"INS-{equipment_id}-{when:%Y%m%d}",
        date=when,
        inspector=_pick(rng, INSPECTORS),
        findings=_pick(rng, current["findings_pool"]),
        recommendations=_pick(rng, current["rec_pool"]),
        severity=severity,
        report_url=REPORT_URL_TEMPLATE.format(equipment_id=equipment_id, index=index),
        status=status,
        failure_type=failure_type,
    )


def _generate_specs(rng: np.random.Generator, equipment_type: EquipmentType):
    """Generate a spec sheet matching the equipment type."""
    if equipment_type == EquipmentType.PIPELINE:
        return PipelineSpecs(
            nominal_diameter_in=float(_pick(rng, [2, 4, 6, 8, 12, 16, 24])),
            material=_pick(rng, ["A106 Gr.B", "A333 Gr.6", "SS316L"]),
            length_m=round(float(rng.uniform(50, 2500)), 1),
            service=_pick(rng, ["Crude", "Naphtha", "Diesel", "Cooling Water", "Steam"]),
        )
    if equipment_type == EquipmentType.PSV:
        return PSVSpecs(
            set_pressure_psig=float(rng.integers(50, 1500)),
            orifice=_pick(rng, ["D", "E", "F", "G", "H", "J", "K", "L"]),
            inlet_size_in=float(_pick(rng, [1, 1.5, 2, 3, 4, 6])),
        )
    if equipment_type == EquipmentType.PRESSURE_VESSEL:
        return PressureVesselSpecs(
            design_pressure_psig=float(rng.integers(100, 800)),
            design_temperature_f=float(rng.integers(150, 750)),
            material=_pick(rng, ["SA-516 Gr.70", "SA-387 Gr.11", "SA-240 316L"]),
            orientation=_pick(rng, ["Vertical", "Horizontal"]),
        )
    if equipment_type == EquipmentType.DRUM:
        return DrumSpecs(
            capacity_m3=round(float(rng.uniform(5, 120)), 1),
            design_pressure_psig=float(rng.integers(50, 400)),
            service=_pick(rng, ["Knock-out", "Reflux", "Flash", "Surge"]),
        )
    return HeatExchangerSpecs(
        tema_type=_pick(rng, ["AES", "BEM", "AEU", "BKU"]),
        tube_count=int(rng.integers(100, 1200)),
        shell_material=_pick(rng, ["Carbon Steel", "SS304", "Duplex 2205"]),
        duty_mmbtu_hr=round(float(rng.uniform(2, 60)), 2),
    )
