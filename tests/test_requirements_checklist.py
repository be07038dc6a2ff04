"""Test requirements checklist evaluation over in-memory records."""

from datetime import date, datetime, timedelta

from casework.models import (
    DeliveredDocument,
    DocumentType,
    DocumentTypeFieldMapping,
    DocumentTypeLegalFramework,
    IndividualProcess,
    LegalFrameworkInfoRequirement,
    Passport,
    Person,
)
from casework.models.enums import (
    ChecklistItemType,
    CompletionStatus,
    DeliveredDocumentStatus,
    EntityType,
    ResponsibleParty,
    ValidityStatus,
    ValidityType,
    WorkflowType,
)
from casework.schemas.checklist import ConditionStatus, InfoFieldStatus
from casework.services.requirements_checklist import (
    DEFAULT_SORT_ORDER,
    build_checklist,
    evaluate_completion,
    get_field_value,
    is_filled,
)

TODAY = date(2025, 6, 1)


def make_process(legal_framework_id="lf-1"):
    return IndividualProcess(
        id="ip-1",
        main_process_id="mp-1",
        person_id="person-1",
        passport_id="passport-1",
        legal_framework_id=legal_framework_id,
        cbo_code=None,
    )


def make_person(**fields):
    return Person(id="person-1", full_name="John Smith", **fields)


def make_passport(number="GB1234567"):
    return Passport(id="passport-1", person_id="person-1", passport_number=number, is_active=True)


def make_document_type(type_id, name, is_active=True):
    return DocumentType(id=type_id, name=name, code=name.upper(), is_active=is_active)


def make_association(type_id, sort_order=None, validity_type=None, validity_days=None, responsible_party=None):
    return DocumentTypeLegalFramework(
        id=f"assoc-{type_id}",
        document_type_id=type_id,
        legal_framework_id="lf-1",
        is_required=True,
        responsible_party=responsible_party,
        validity_type=validity_type,
        validity_days=validity_days,
        sort_order=sort_order,
    )


def make_mapping(type_id, entity_type, field_path, sort_order=0, is_active=True):
    return DocumentTypeFieldMapping(
        id=f"map-{type_id}-{field_path}",
        document_type_id=type_id,
        entity_type=entity_type,
        field_path=field_path,
        label=field_path,
        field_type="text",
        sort_order=sort_order,
        is_active=is_active,
    )


def make_delivered(type_id, status=DeliveredDocumentStatus.UPLOADED, version=1, is_latest=True, **dates):
    return DeliveredDocument(
        id=f"doc-{type_id}-v{version}",
        individual_process_id="ip-1",
        document_type_id=type_id,
        filename="scan.pdf",
        status=status,
        uploaded_at=datetime(2025, 5, 1, 12, 0),
        version=version,
        is_latest=is_latest,
        **dates,
    )


def make_info_requirement(field_path, entity_type=EntityType.PERSON, sort_order=0, is_active=True):
    return LegalFrameworkInfoRequirement(
        id=f"info-{field_path}",
        legal_framework_id="lf-1",
        entity_type=entity_type,
        field_path=field_path,
        label=field_path,
        field_type="text",
        responsible_party=ResponsibleParty.CLIENT,
        is_required=True,
        sort_order=sort_order,
        is_active=is_active,
    )


def run(associations, document_types, field_mappings=(), info_requirements=(), delivered=(), conditions=None,
        person=None, passport=None):
    return build_checklist(
        make_process(),
        person or make_person(),
        passport,
        None,
        associations=list(associations),
        document_types={t.id: t for t in document_types},
        field_mappings=list(field_mappings),
        info_requirements=list(info_requirements),
        delivered_documents=list(delivered),
        conditions=conditions or {},
        today=TODAY,
    )


def test_process_without_legal_framework_has_empty_checklist():
    result = build_checklist(
        make_process(legal_framework_id=None), make_person(), None, None,
        associations=[make_association("dt-1")],
        document_types={"dt-1": make_document_type("dt-1", "Passport")},
        field_mappings=[], info_requirements=[], delivered_documents=[], conditions={},
    )
    assert result.items == []
    assert result.summary.total == 0


def test_get_field_value():
    person = make_person(mother_name="Ana Smith")
    passport = make_passport()

    assert get_field_value(EntityType.PERSON, "mother_name", person, None, passport, None) == "Ana Smith"
    assert get_field_value("passport", "passport_number", person, None, passport, None) == "GB1234567"
    assert get_field_value(EntityType.PERSON, "not_a_column", person, None, passport, None) is None
    assert get_field_value(EntityType.PERSON, "passports", person, None, passport, None) is None
    assert get_field_value("vehicle", "plate", person, None, passport, None) is None
    assert get_field_value(EntityType.COMPANY, "name", person, None, passport, None) is None


def test_is_filled():
    assert is_filled("x")
    assert is_filled(0)
    assert is_filled(False)
    assert not is_filled(None)
    assert not is_filled("")


def test_evaluate_completion_rules():
    filled = InfoFieldStatus(entity_type=EntityType.PERSON, field_path="a", label="a", is_filled=True)
    empty = InfoFieldStatus(entity_type=EntityType.PERSON, field_path="b", label="b", is_filled=False)

    assert evaluate_completion([filled], True, True, True) == CompletionStatus.COMPLETED
    assert evaluate_completion([filled, empty], True, True, True) == CompletionStatus.PARTIAL
    assert evaluate_completion([filled], True, False, True) == CompletionStatus.PARTIAL
    assert evaluate_completion([], True, True, True) == CompletionStatus.COMPLETED
    assert evaluate_completion([], True, True, False) == CompletionStatus.PARTIAL
    assert evaluate_completion([filled], False, True, True) == CompletionStatus.PARTIAL
    assert evaluate_completion([filled, empty], False, True, True) == CompletionStatus.PARTIAL
    assert evaluate_completion([empty], False, True, True) == CompletionStatus.PENDING
    assert evaluate_completion([], False, True, True) == CompletionStatus.PENDING


def test_document_with_info_completed():
    passport_type = make_document_type("dt-passport", "Passport")
    result = run(
        [make_association("dt-passport", 1, ValidityType.MIN_REMAINING, 180)],
        [passport_type],
        field_mappings=[make_mapping("dt-passport", EntityType.PASSPORT, "passport_number")],
        delivered=[make_delivered("dt-passport", expiry_date=TODAY + timedelta(days=3650))],
        passport=make_passport(),
    )

    item = result.items[0]
    assert item.type == ChecklistItemType.DOCUMENT_WITH_INFO
    assert item.completion_status == CompletionStatus.COMPLETED
    assert item.document.validity_check.status == ValidityStatus.VALID
    assert item.document.workflow_type == WorkflowType.UPLOAD
    assert item.info_fields[0].current_value == "GB1234567"
    assert result.summary.completed == 1


def test_placeholder_is_not_a_delivered_document():
    result = run(
        [make_association("dt-passport", 1)],
        [make_document_type("dt-passport", "Passport")],
        field_mappings=[make_mapping("dt-passport", EntityType.PASSPORT, "passport_number")],
        delivered=[make_delivered("dt-passport", status=DeliveredDocumentStatus.NOT_STARTED)],
        passport=make_passport(),
    )

    item = result.items[0]
    # Info filled, nothing uploaded
    assert item.completion_status == CompletionStatus.PARTIAL
    assert item.document.delivered_document.status == DeliveredDocumentStatus.NOT_STARTED


def test_rejected_document_still_counts_as_delivered():
    result = run(
        [make_association("dt-1")],
        [make_document_type("dt-1", "Diploma")],
        delivered=[make_delivered("dt-1", status=DeliveredDocumentStatus.REJECTED)],
    )
    assert result.items[0].completion_status == CompletionStatus.COMPLETED


def test_document_without_upload_is_pending():
    result = run([make_association("dt-1")], [make_document_type("dt-1", "Diploma")])

    item = result.items[0]
    assert item.type == ChecklistItemType.DOCUMENT
    assert item.completion_status == CompletionStatus.PENDING
    assert item.document.delivered_document is None
    assert item.document.validity_check is None


def test_unfulfilled_condition_makes_item_partial():
    document = make_delivered("dt-criminal", issue_date=TODAY - timedelta(days=10))
    conditions = {document.id: [ConditionStatus(name="Apostilled", is_fulfilled=False)]}

    result = run(
        [make_association("dt-criminal", 2, ValidityType.MAX_AGE, 90)],
        [make_document_type("dt-criminal", "Criminal record")],
        delivered=[document],
        conditions=conditions,
    )
    assert result.items[0].completion_status == CompletionStatus.PARTIAL

    conditions[document.id][0] = ConditionStatus(name="Apostilled", is_fulfilled=True)
    result = run(
        [make_association("dt-criminal", 2, ValidityType.MAX_AGE, 90)],
        [make_document_type("dt-criminal", "Criminal record")],
        delivered=[document],
        conditions=conditions,
    )
    assert result.items[0].completion_status == CompletionStatus.COMPLETED


def test_failing_validity_makes_item_partial():
    result = run(
        [make_association("dt-criminal", 2, ValidityType.MAX_AGE, 90)],
        [make_document_type("dt-criminal", "Criminal record")],
        delivered=[make_delivered("dt-criminal", issue_date=TODAY - timedelta(days=120))],
    )

    item = result.items[0]
    assert item.completion_status == CompletionStatus.PARTIAL
    assert item.document.validity_check.status == ValidityStatus.EXPIRED
    assert item.document.validity_check.message_key == "validity.maxAgeExceeded"
    assert item.document.validity_check.days_value == 30


def test_latest_version_is_used():
    old = make_delivered("dt-1", version=1, is_latest=False, issue_date=TODAY - timedelta(days=400))
    new = make_delivered("dt-1", version=2, is_latest=True, issue_date=TODAY - timedelta(days=5))

    result = run(
        [make_association("dt-1", 1, ValidityType.MAX_AGE, 90)],
        [make_document_type("dt-1", "Criminal record")],
        delivered=[new, old],
    )

    item = result.items[0]
    assert item.document.delivered_document.version == 2
    assert item.completion_status == CompletionStatus.COMPLETED


def test_inactive_document_types_and_mappings_are_skipped():
    result = run(
        [make_association("dt-1", 1), make_association("dt-old", 2)],
        [make_document_type("dt-1", "Diploma"), make_document_type("dt-old", "Old form", is_active=False)],
        field_mappings=[make_mapping("dt-1", EntityType.PERSON, "profession", is_active=False)],
    )

    assert [item.label for item in result.items] == ["Diploma"]
    assert result.items[0].type == ChecklistItemType.DOCUMENT
    assert result.items[0].info_fields is None


def test_info_requirements_and_ordering():
    result = run(
        [make_association("dt-unsorted"), make_association("dt-passport", 1)],
        [make_document_type("dt-unsorted", "Diploma"), make_document_type("dt-passport", "Passport")],
        field_mappings=[make_mapping("dt-passport", EntityType.PERSON, "mother_name")],
        info_requirements=[
            make_info_requirement("mother_name", sort_order=3),
            make_info_requirement("profession", sort_order=2),
            make_info_requirement("father_name", sort_order=4, is_active=False),
        ],
        person=make_person(profession="Welder"),
    )

    labels = [item.label for item in result.items]
    assert labels == ["Passport", "profession", "mother_name", "Diploma"]
    assert result.items[-1].sort_order == DEFAULT_SORT_ORDER

    profession = result.items[1]
    assert profession.type == ChecklistItemType.INFO
    assert profession.completion_status == CompletionStatus.COMPLETED
    assert profession.linked_document_type is None

    mother_name = result.items[2]
    assert mother_name.completion_status == CompletionStatus.PENDING
    assert mother_name.linked_document_type.document_type_id == "dt-passport"

    assert result.summary.total == 4
    assert result.summary.completed == 1
    assert result.summary.pending == 3
    assert result.summary.partial == 0
