"""Document validity rules.

Pure helpers, no database access: they work on the dates stored on a
delivered document and the rule configured on its legal-framework
association.
"""

from datetime import date
from typing import Optional

from casework.core.config import settings
from casework.models.enums import ValidityStatus, ValidityType
from casework.schemas.checklist import ValidityCheckResult


def check_document_validity(
    validity_type: Optional[str],
    validity_days: Optional[int],
    issue_date: Optional[date],
    expiry_date: Optional[date],
    today: Optional[date] = None,
    threshold: Optional[int] = None,
) -> ValidityCheckResult:
    """Check a document against its validity rule.

    Args:
        validity_type: "min_remaining", "max_age" or None (no rule)
        validity_days: Number of days for the rule
        issue_date: Date the document was issued
        expiry_date: Date the document expires
        today: Reference date, defaults to date.today()
        threshold: Days before the limit when the document starts
            expiring soon, defaults to settings.EXPIRING_SOON_THRESHOLD_DAYS

    Returns:
        ValidityCheckResult with status, message key and day count
    """
    if not validity_type or not validity_days:
        return ValidityCheckResult(status=ValidityStatus.NO_RULE, message_key="validity.noRule")

    today = today or date.today()
    if threshold is None:
        threshold = settings.EXPIRING_SOON_THRESHOLD_DAYS

    if validity_type == ValidityType.MIN_REMAINING:
        if not expiry_date:
            return ValidityCheckResult(
                status=ValidityStatus.MISSING_DATE,
                message_key="validity.missingExpiryDate",
            )

        days_remaining = (expiry_date - today).days

        if days_remaining < 0:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.expired",
                days_value=abs(days_remaining),
            )
        if days_remaining < validity_days:
            # Still valid today but not for as long as the framework demands
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.insufficientRemaining",
                days_value=days_remaining,
            )
        if days_remaining < validity_days + threshold:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRING_SOON,
                message_key="validity.expiringSoon",
                days_value=days_remaining,
            )
        return ValidityCheckResult(
            status=ValidityStatus.VALID,
            message_key="validity.valid",
            days_value=days_remaining,
        )

    if validity_type == ValidityType.MAX_AGE:
        if not issue_date:
            return ValidityCheckResult(
                status=ValidityStatus.MISSING_DATE,
                message_key="validity.missingIssueDate",
            )

        days_since_issue = (today - issue_date).days
        days_left = validity_days - days_since_issue

        if days_left < 0:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRED,
                message_key="validity.maxAgeExceeded",
                days_value=abs(days_left),
            )
        if days_left < threshold:
            return ValidityCheckResult(
                status=ValidityStatus.EXPIRING_SOON,
                message_key="validity.expiringSoon",
                days_value=days_left,
            )
        return ValidityCheckResult(
            status=ValidityStatus.VALID,
            message_key="validity.valid",
            days_value=days_left,
        )

    return ValidityCheckResult(status=ValidityStatus.NO_RULE, message_key="validity.noRule")


def is_validity_ok(check: Optional[ValidityCheckResult]) -> bool:
    """A missing check, a valid document or no rule all count as ok"""
    return check is None or check.status in (ValidityStatus.VALID, ValidityStatus.NO_RULE)
