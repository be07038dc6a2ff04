"""Tabular export of individual processes (CSV and Excel)."""

from typing import Iterable, Optional, Tuple

from tablib import Dataset

from casework.models.company import Company
from casework.models.legal_framework import LegalFramework
from casework.models.person import Person
from casework.models.process import IndividualProcess, MainProcess
from casework.services.government_status import calculate_government_status

EXPORT_COLUMNS = [
    "reference_number",
    "person",
    "company",
    "status",
    "legal_framework",
    "government_status",
    "government_progress",
    "protocol_number",
    "rnm_number",
    "deadline_date",
]

EXPORT_FORMATS = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

ExportRow = Tuple[IndividualProcess, MainProcess, Person, Optional[Company], Optional[LegalFramework]]


def build_individual_processes_dataset(rows: Iterable[ExportRow]) -> Dataset:
    """One dataset row per individual process, headed by EXPORT_COLUMNS"""
    data = Dataset(title="Individual processes")
    data.headers = EXPORT_COLUMNS

    for process, main_process, person, company, legal_framework in rows:
        government = calculate_government_status(process)
        data.append((
            main_process.reference_number,
            person.full_name,
            company.name if company else "",
            process.status.value,
            legal_framework.name if legal_framework else "",
            government.status.value,
            f"{government.progress:g}",
            process.protocol_number or "",
            process.rnm_number or "",
            process.deadline_date.isoformat() if process.deadline_date else "",
        ))

    return data
