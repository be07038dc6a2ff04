"""Main process status calculation.

A main process shows the statuses of its individual processes rather than a
stored value, e.g. "3 Deferido, 2 Em Trâmite" / "3 Approved, 2 Under Government Review".
"""

from typing import Dict, Iterable, List, Optional

from casework.models.enums import IndividualProcessStatus as IPS
from casework.schemas.main_process import CalculatedStatus, StatusBreakdown

STATUS_LABELS: Dict[IPS, Dict[str, str]] = {
    IPS.PENDING_DOCUMENTS: {"pt": "Aguardando Documentos", "en": "Pending Documents"},
    IPS.DOCUMENTS_SUBMITTED: {"pt": "Documentos Enviados", "en": "Documents Submitted"},
    IPS.DOCUMENTS_APPROVED: {"pt": "Documentos Aprovados", "en": "Documents Approved"},
    IPS.PREPARING_SUBMISSION: {"pt": "Em Preparação", "en": "Preparing Submission"},
    IPS.SUBMITTED_TO_GOVERNMENT: {"pt": "Protocolado", "en": "Submitted to Government"},
    IPS.UNDER_GOVERNMENT_REVIEW: {"pt": "Em Trâmite", "en": "Under Government Review"},
    IPS.GOVERNMENT_APPROVED: {"pt": "Deferido", "en": "Approved"},
    IPS.GOVERNMENT_REJECTED: {"pt": "Indeferido", "en": "Rejected"},
    IPS.COMPLETED: {"pt": "Concluído", "en": "Completed"},
    IPS.CANCELLED: {"pt": "Cancelado", "en": "Cancelled"},
}


def status_label(status: IPS, locale: str = "pt") -> str:
    labels = STATUS_LABELS.get(status)
    if labels is None:
        return str(status)
    return labels.get(locale) or labels["pt"]


def get_status_breakdown(statuses: Iterable[Optional[IPS]]) -> List[StatusBreakdown]:
    """Group statuses and count them.

    Processes without a status are skipped. Sorted by count descending, then
    by Portuguese label.
    """
    counts: Dict[IPS, int] = {}
    for status in statuses:
        if status is None:
            continue
        counts[status] = counts.get(status, 0) + 1

    breakdown = [
        StatusBreakdown(
            status=status,
            label=status_label(status, "pt"),
            label_en=status_label(status, "en"),
            count=count,
        )
        for status, count in counts.items()
    ]
    breakdown.sort(key=lambda item: (-item.count, item.label))
    return breakdown


def format_status_breakdown(breakdown: List[StatusBreakdown], locale: str = "pt") -> str:
    """Human-readable text for a breakdown"""
    if not breakdown:
        return "Sem status definido" if locale == "pt" else "No status defined"

    def name(item: StatusBreakdown) -> str:
        return item.label_en if locale == "en" and item.label_en else item.label

    if len(breakdown) == 1:
        item = breakdown[0]
        if item.count == 1:
            return name(item)
        return f"{item.count} {name(item)}"

    return ", ".join(f"{item.count} {name(item)}" for item in breakdown)


def calculate_main_process_status(statuses: Iterable[Optional[IPS]]) -> CalculatedStatus:
    """Calculate the displayed status of a main process.

    Args:
        statuses: Status of each individual process in the main process

    Returns:
        CalculatedStatus with pt/en display text and breakdown
    """
    statuses = list(statuses)
    if not statuses:
        return CalculatedStatus(
            display_text="Sem processos individuais",
            display_text_en="No individual processes",
            breakdown=[],
            total_processes=0,
            has_multiple_statuses=False,
            most_common_status=None,
        )

    breakdown = get_status_breakdown(statuses)
    return CalculatedStatus(
        display_text=format_status_breakdown(breakdown, "pt"),
        display_text_en=format_status_breakdown(breakdown, "en"),
        breakdown=breakdown,
        total_processes=len(statuses),
        has_multiple_statuses=len(breakdown) > 1,
        most_common_status=breakdown[0].status if breakdown else None,
    )
