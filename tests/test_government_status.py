"""Test government submission status derivation."""

from datetime import date

import pytest

from casework.models.enums import GovernmentSubmissionStatus
from casework.services.government_status import (
    calculate_government_fields_completion,
    calculate_government_status,
    get_next_government_action,
)


def test_not_started_when_nothing_is_filled():
    result = calculate_government_status({})
    assert result.status == GovernmentSubmissionStatus.NOT_STARTED
    assert result.progress == 0
    assert result.label == "notStarted"
    assert result.color == "gray"


@pytest.mark.parametrize("fields,progress", [
    ({"mre_office_number": "MRE-1"}, 37.5),
    ({"dou_number": "123"}, 37.5),
    ({"mre_office_number": "MRE-1", "dou_number": "123"}, 50),
])
def test_preparing_progress(fields, progress):
    result = calculate_government_status(fields)
    assert result.status == GovernmentSubmissionStatus.PREPARING
    assert result.progress == progress
    assert result.color == "yellow"


def test_empty_strings_do_not_count():
    result = calculate_government_status({"mre_office_number": "", "protocol_number": ""})
    assert result.status == GovernmentSubmissionStatus.NOT_STARTED


def test_later_stages_take_precedence():
    submitted = calculate_government_status({"mre_office_number": "MRE-1", "protocol_number": "P-9"})
    assert (submitted.status, submitted.progress, submitted.color) == (
        GovernmentSubmissionStatus.SUBMITTED, 60, "blue"
    )

    under_review = calculate_government_status({"protocol_number": "P-9", "dou_date": date(2025, 3, 1)})
    assert (under_review.status, under_review.progress, under_review.label) == (
        GovernmentSubmissionStatus.UNDER_REVIEW, 80, "underReview"
    )

    # RNM alone is enough for approval
    approved = calculate_government_status({"rnm_number": "V123456-X"})
    assert (approved.status, approved.progress, approved.color) == (
        GovernmentSubmissionStatus.APPROVED, 100, "green"
    )


def test_reads_attributes_of_objects():
    class Fields:
        protocol_number = "P-1"

    assert calculate_government_status(Fields()).status == GovernmentSubmissionStatus.SUBMITTED


def test_fields_completion_is_rounded_percentage():
    assert calculate_government_fields_completion({}) == 0
    assert calculate_government_fields_completion({"protocol_number": "P-1"}) == 11
    assert calculate_government_fields_completion({"protocol_number": "P-1", "dou_number": "1"}) == 22
    full = {
        "mre_office_number": "M",
        "dou_number": "1",
        "dou_section": "1",
        "dou_page": "10",
        "dou_date": date(2025, 1, 1),
        "protocol_number": "P",
        "rnm_number": "R",
        "rnm_deadline": date(2025, 6, 1),
        "appointment_datetime": "2025-02-01T10:00:00",
    }
    assert calculate_government_fields_completion(full) == 100


def test_next_action_per_stage():
    assert get_next_government_action({}) == "startPreparation"
    assert get_next_government_action({"dou_number": "1"}) == "submitProtocol"
    assert get_next_government_action({"protocol_number": "P"}) == "awaitingDOUPublication"
    assert get_next_government_action({"dou_date": date(2025, 1, 1)}) == "awaitingRNMApproval"
    assert get_next_government_action({"rnm_number": "R"}) is None
