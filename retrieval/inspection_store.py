"""Read-only query surface over the inspection record set."""

import logging
from typing import Dict, List, Optional, Sequence

from schemas.equipment import Equipment, EquipmentSummary, SearchResult

logger = logging.getLogger(__name__)


class InspectionStore:
    """
    In-memory inspection database.

    Answers three query shapes over a fixed record set:
    - list all equipment
    - full history for one equipment ID
    - full-text search across inspection findings

    The record set is never modified after construction, so every query is
    deterministic for a given store.
    """

    def __init__(self, equipment: Sequence[Equipment]):
        """
        Initialize store.

        Args:
            equipment: Equipment records, in listing order

        Raises:
            ValueError: If two records share an ID
        """
        self._equipment = tuple(equipment)
        self._by_id: Dict[str, Equipment] = {}

        for eq in self._equipment:
            if eq.id in self._by_id:
                raise ValueError(f"Duplicate equipment ID: {eq.id}")
            self._by_id[eq.id] = eq

        logger.info(f"Inspection store loaded with {len(self._equipment)} equipment records")

    def __len__(self) -> int:
        return len(self._equipment)

    @property
    def equipment(self) -> tuple:
        """All equipment records in listing order."""
        return self._equipment

    def list_equipment(self) -> List[EquipmentSummary]:
        """Get summaries (id, name, type, location) for all equipment."""
        return [eq.summary() for eq in self._equipment]

    def filter_equipment(self, term: str) -> List[EquipmentSummary]:
        """
        Filter equipment summaries for the asset browser.

        Args:
            term: Case-insensitive substring matched against name, type,
                location and ID; blank returns everything

        Returns:
            Matching summaries in record-set order
        """
        summaries = self.list_equipment()
        needle = term.strip().lower()
        if not needle:
            return summaries

        return [
            s for s in summaries
            if any(
                needle in field.lower()
                for field in (s.name, s.equipment_type.value, s.location, s.id)
            )
        ]

    def get_equipment_history(self, equipment_id: str) -> Optional[Equipment]:
        """
        Get the full record for one piece of equipment.

        Args:
            equipment_id: Exact equipment ID (e.g. "EQ-PSV-001")

        Returns:
            Equipment with inspections ordered most recent first, or None
        """
        return self._by_id.get(equipment_id)

    def search_inspections(self, query: str) -> List[SearchResult]:
        """
        Case-insensitive substring search over inspections.

        Matches against findings, recommendations, severity label, equipment
        name and failure classification.

        Args:
            query: Keyword or phrase (e.g. "corrosion")

        Returns:
            Matching inspections in record-set order
        """
        needle = query.lower()
        results = []

        for eq in self._equipment:
            for ins in eq.inspections:
                haystack = [
                    ins.findings,
                    ins.recommendations,
                    ins.severity.value,
                    eq.name,
                ]
                if ins.failure_type is not None:
                    haystack.append(ins.failure_type.value)

                if any(needle in field.lower() for field in haystack):
                    results.append(SearchResult(
                        equipment_name=eq.name,
                        date=ins.date,
                        finding=ins.findings,
                        severity=ins.severity,
                        report_url=ins.report_url,
                    ))

        return results
