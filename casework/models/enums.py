"""
Enum definitions for database models
"""
import enum


class UserRole(str, enum.Enum):
    """Role of a user profile"""
    ADMIN = "admin"        # Consultancy staff, sees every company
    CLIENT = "client"      # Company user, sees only its own company


class RequestStatus(str, enum.Enum):
    """Process request review status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MainProcessStatus(str, enum.Enum):
    """Stored status of a main process"""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class IndividualProcessStatus(str, enum.Enum):
    """Lifecycle status of an individual process"""
    PENDING_DOCUMENTS = "pending_documents"
    DOCUMENTS_SUBMITTED = "documents_submitted"
    DOCUMENTS_APPROVED = "documents_approved"
    PREPARING_SUBMISSION = "preparing_submission"
    SUBMITTED_TO_GOVERNMENT = "submitted_to_government"
    UNDER_GOVERNMENT_REVIEW = "under_government_review"
    GOVERNMENT_APPROVED = "government_approved"
    GOVERNMENT_REJECTED = "government_rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveredDocumentStatus(str, enum.Enum):
    """Status of a delivered document version"""
    NOT_STARTED = "not_started"        # Placeholder seeded from the legal framework
    PENDING_UPLOAD = "pending_upload"
    UPLOADED = "uploaded"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class ValidityType(str, enum.Enum):
    """Validity rule attached to a required document"""
    MIN_REMAINING = "min_remaining"    # At least N days left before expiry
    MAX_AGE = "max_age"                # Issued within the last N days


class ResponsibleParty(str, enum.Enum):
    """Who has to provide a requirement"""
    CLIENT = "client"
    ADMIN = "admin"
    COMPANY = "company"


class WorkflowType(str, enum.Enum):
    """How a required document is obtained"""
    UPLOAD = "upload"
    ADMIN_GENERATED = "admin_generated"
    GOVERNMENT = "government"


class EntityType(str, enum.Enum):
    """Record an info field is read from"""
    PERSON = "person"
    INDIVIDUAL_PROCESS = "individual_process"
    PASSPORT = "passport"
    COMPANY = "company"


class TaskStatus(str, enum.Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ValidityStatus(str, enum.Enum):
    """Outcome of a document validity check"""
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    MISSING_DATE = "missing_date"
    NO_RULE = "no_rule"


class CompletionStatus(str, enum.Enum):
    """Checklist item completion"""
    COMPLETED = "completed"
    PARTIAL = "partial"
    PENDING = "pending"


class ChecklistItemType(str, enum.Enum):
    DOCUMENT = "document"
    DOCUMENT_WITH_INFO = "document_with_info"
    INFO = "info"


class GovernmentSubmissionStatus(str, enum.Enum):
    """Coarse government submission stage derived from protocol fields"""
    NOT_STARTED = "not_started"
    PREPARING = "preparing"
    SUBMITTED = "submitted"        # Protocol number present
    UNDER_REVIEW = "under_review"  # Published in the DOU
    APPROVED = "approved"          # RNM number issued
