"""Government submission status.

Derives the submission stage of an individual process from which
government protocol fields are filled:

- Not started: no fields filled (0%)
- Preparing: MRE office number and/or DOU number, no protocol (25-50%)
- Submitted: protocol number present (60%)
- Under review: DOU publication date present (80%)
- Approved: RNM number issued (100%)
"""

from typing import Any, Optional

from casework.models.enums import GovernmentSubmissionStatus
from casework.schemas.government import GovernmentStatusResult

GOVERNMENT_FIELDS = (
    "mre_office_number",
    "dou_number",
    "dou_section",
    "dou_page",
    "dou_date",
    "protocol_number",
    "rnm_number",
    "rnm_deadline",
    "appointment_datetime",
)

# Fields that move a process into the preparing stage
PREPARATION_FIELDS = ("mre_office_number", "dou_number")


def _field(fields: Any, name: str) -> Any:
    """Read a protocol field from a mapping or an object"""
    if isinstance(fields, dict):
        return fields.get(name)
    return getattr(fields, name, None)


def calculate_government_status(fields: Any) -> GovernmentStatusResult:
    """Calculate the submission stage.

    Args:
        fields: IndividualProcess (or any mapping/object with the protocol fields)

    Returns:
        GovernmentStatusResult with status, progress, label and color
    """
    if _field(fields, "rnm_number"):
        return GovernmentStatusResult(
            status=GovernmentSubmissionStatus.APPROVED, progress=100, label="approved", color="green"
        )

    if _field(fields, "dou_date"):
        return GovernmentStatusResult(
            status=GovernmentSubmissionStatus.UNDER_REVIEW, progress=80, label="underReview", color="blue"
        )

    if _field(fields, "protocol_number"):
        return GovernmentStatusResult(
            status=GovernmentSubmissionStatus.SUBMITTED, progress=60, label="submitted", color="blue"
        )

    filled = sum(1 for name in PREPARATION_FIELDS if _field(fields, name))
    if filled > 0:
        progress = min(25 + (filled / len(PREPARATION_FIELDS)) * 25, 50)
        return GovernmentStatusResult(
            status=GovernmentSubmissionStatus.PREPARING, progress=progress, label="preparing", color="yellow"
        )

    return GovernmentStatusResult(
        status=GovernmentSubmissionStatus.NOT_STARTED, progress=0, label="notStarted", color="gray"
    )


def calculate_government_fields_completion(fields: Any) -> int:
    """Rounded percentage of the protocol fields that are filled"""
    filled = sum(1 for name in GOVERNMENT_FIELDS if _field(fields, name))
    return round(filled / len(GOVERNMENT_FIELDS) * 100)


def get_next_government_action(fields: Any) -> Optional[str]:
    """Translation key of the next expected action, or None when approved"""
    status = calculate_government_status(fields).status

    if status == GovernmentSubmissionStatus.NOT_STARTED:
        return "startPreparation"
    if status == GovernmentSubmissionStatus.PREPARING:
        return None if _field(fields, "protocol_number") else "submitProtocol"
    if status == GovernmentSubmissionStatus.SUBMITTED:
        return None if _field(fields, "dou_date") else "awaitingDOUPublication"
    if status == GovernmentSubmissionStatus.UNDER_REVIEW:
        return None if _field(fields, "rnm_number") else "awaitingRNMApproval"
    return None
