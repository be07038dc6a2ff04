"""
Pydantic schemas for request/response validation
"""
from casework.schemas.user import UserCreate, UserResponse
from casework.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from casework.schemas.person import PersonCreate, PersonUpdate, PersonResponse, PassportCreate, PassportResponse
from casework.schemas.process_request import (
    ProcessRequestCreate,
    ProcessRequestUpdate,
    ProcessRequestReject,
    ProcessRequestResponse,
)
from casework.schemas.main_process import MainProcessCreate, MainProcessResponse, CalculatedStatus
from casework.schemas.individual_process import (
    IndividualProcessCreate,
    IndividualProcessUpdate,
    IndividualProcessResponse,
    StatusChange,
)
from casework.schemas.document import DocumentUploadResponse, DocumentReview
from casework.schemas.checklist import ChecklistResponse, ValidityCheckResult
from casework.schemas.government import GovernmentStatusResult, GovernmentStatusResponse
from casework.schemas.task import TaskCreate, TaskUpdate, TaskResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "PersonCreate",
    "PersonUpdate",
    "PersonResponse",
    "PassportCreate",
    "PassportResponse",
    "ProcessRequestCreate",
    "ProcessRequestUpdate",
    "ProcessRequestReject",
    "ProcessRequestResponse",
    "MainProcessCreate",
    "MainProcessResponse",
    "CalculatedStatus",
    "IndividualProcessCreate",
    "IndividualProcessUpdate",
    "IndividualProcessResponse",
    "StatusChange",
    "DocumentUploadResponse",
    "DocumentReview",
    "ChecklistResponse",
    "ValidityCheckResult",
    "GovernmentStatusResult",
    "GovernmentStatusResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
