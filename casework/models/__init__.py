"""
Database models package
"""
from casework.models.enums import (
    UserRole,
    RequestStatus,
    MainProcessStatus,
    IndividualProcessStatus,
    DeliveredDocumentStatus,
    ValidityType,
    ResponsibleParty,
    WorkflowType,
    EntityType,
    TaskStatus,
    TaskPriority,
    ValidityStatus,
    CompletionStatus,
    ChecklistItemType,
    GovernmentSubmissionStatus,
)
from casework.models.company import Company
from casework.models.user import UserProfile
from casework.models.person import Person, Passport
from casework.models.legal_framework import ProcessType, LegalFramework, LegalFrameworkInfoRequirement
from casework.models.document_type import (
    DocumentType,
    DocumentTypeLegalFramework,
    DocumentTypeFieldMapping,
    DocumentTypeCondition,
)
from casework.models.process_request import ProcessRequest
from casework.models.process import MainProcess, IndividualProcess, ProcessHistory
from casework.models.delivered_document import DeliveredDocument, DeliveredDocumentCondition
from casework.models.task import Task
from casework.models.activity_log import ActivityLog

__all__ = [
    "UserRole",
    "RequestStatus",
    "MainProcessStatus",
    "IndividualProcessStatus",
    "DeliveredDocumentStatus",
    "ValidityType",
    "ResponsibleParty",
    "WorkflowType",
    "EntityType",
    "TaskStatus",
    "TaskPriority",
    "ValidityStatus",
    "CompletionStatus",
    "ChecklistItemType",
    "GovernmentSubmissionStatus",
    "Company",
    "UserProfile",
    "Person",
    "Passport",
    "ProcessType",
    "LegalFramework",
    "LegalFrameworkInfoRequirement",
    "DocumentType",
    "DocumentTypeLegalFramework",
    "DocumentTypeFieldMapping",
    "DocumentTypeCondition",
    "ProcessRequest",
    "MainProcess",
    "IndividualProcess",
    "ProcessHistory",
    "DeliveredDocument",
    "DeliveredDocumentCondition",
    "Task",
    "ActivityLog",
]
