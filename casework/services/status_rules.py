"""Status transition rules for individual and main processes."""

from enum import Enum
from typing import Dict, List, Type

from casework.models.enums import IndividualProcessStatus as IPS
from casework.models.enums import MainProcessStatus as MPS

INDIVIDUAL_STATUS_TRANSITIONS: Dict[IPS, List[IPS]] = {
    IPS.PENDING_DOCUMENTS: [IPS.DOCUMENTS_SUBMITTED, IPS.CANCELLED],
    IPS.DOCUMENTS_SUBMITTED: [IPS.DOCUMENTS_APPROVED, IPS.PENDING_DOCUMENTS, IPS.CANCELLED],
    IPS.DOCUMENTS_APPROVED: [IPS.PREPARING_SUBMISSION, IPS.CANCELLED],
    IPS.PREPARING_SUBMISSION: [IPS.SUBMITTED_TO_GOVERNMENT, IPS.CANCELLED],
    IPS.SUBMITTED_TO_GOVERNMENT: [IPS.UNDER_GOVERNMENT_REVIEW, IPS.CANCELLED],
    IPS.UNDER_GOVERNMENT_REVIEW: [IPS.GOVERNMENT_APPROVED, IPS.GOVERNMENT_REJECTED, IPS.CANCELLED],
    IPS.GOVERNMENT_APPROVED: [IPS.COMPLETED, IPS.CANCELLED],
    IPS.GOVERNMENT_REJECTED: [IPS.PENDING_DOCUMENTS, IPS.CANCELLED],
    IPS.COMPLETED: [IPS.UNDER_GOVERNMENT_REVIEW],
    IPS.CANCELLED: [IPS.PENDING_DOCUMENTS],
}

MAIN_STATUS_TRANSITIONS: Dict[MPS, List[MPS]] = {
    MPS.DRAFT: [MPS.IN_PROGRESS, MPS.CANCELLED],
    MPS.IN_PROGRESS: [MPS.COMPLETED, MPS.CANCELLED],
    MPS.COMPLETED: [MPS.IN_PROGRESS],
    MPS.CANCELLED: [MPS.IN_PROGRESS],
}


def _allowed(transitions: Dict, status_enum: Type[Enum], current_status: str) -> List:
    # Enum members hash by name, so plain strings must be converted before the lookup
    try:
        return list(transitions.get(status_enum(current_status), []))
    except ValueError:
        return []


def _is_valid(transitions: Dict, status_enum: Type[Enum], current_status: str, new_status: str) -> bool:
    if current_status == new_status:
        return True
    return new_status in _allowed(transitions, status_enum, current_status)


def is_valid_individual_status_transition(current_status: str, new_status: str) -> bool:
    """Same status is always valid; unknown statuses allow nothing else"""
    return _is_valid(INDIVIDUAL_STATUS_TRANSITIONS, IPS, current_status, new_status)


def is_valid_main_status_transition(current_status: str, new_status: str) -> bool:
    return _is_valid(MAIN_STATUS_TRANSITIONS, MPS, current_status, new_status)


def get_next_allowed_individual_statuses(current_status: str) -> List[IPS]:
    return _allowed(INDIVIDUAL_STATUS_TRANSITIONS, IPS, current_status)


def get_next_allowed_main_statuses(current_status: str) -> List[MPS]:
    return _allowed(MAIN_STATUS_TRANSITIONS, MPS, current_status)
