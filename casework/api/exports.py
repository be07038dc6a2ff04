"""
Export API endpoints
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import company_scope, get_current_user
from casework.models.company import Company
from casework.models.legal_framework import LegalFramework
from casework.models.person import Person
from casework.models.process import IndividualProcess, MainProcess
from casework.models.user import UserProfile
from casework.services.export_service import EXPORT_FORMATS, build_individual_processes_dataset

logger = logging.getLogger(__name__)

router = APIRouter()


async def export_individual_processes(user: UserProfile, db: AsyncSession, export_format: str) -> Response:
    """Individual processes the caller can see, rendered in export_format"""
    query = (
        select(IndividualProcess, MainProcess, Person, Company, LegalFramework)
        .join(MainProcess, MainProcess.id == IndividualProcess.main_process_id)
        .join(Person, Person.id == IndividualProcess.person_id)
        .outerjoin(Company, Company.id == MainProcess.company_id)
        .outerjoin(LegalFramework, LegalFramework.id == IndividualProcess.legal_framework_id)
        .order_by(MainProcess.reference_number, Person.full_name)
    )

    scope = company_scope(user)
    if scope is not None:
        query = query.where(MainProcess.company_id == scope)

    result = await db.execute(query)
    data = build_individual_processes_dataset(result.all())
    logger.info("Exporting %d individual processes as %s for %s", data.height, export_format, user.id)

    filename = f"individual-processes.{export_format}"
    return Response(
        content=data.export(export_format),
        media_type=EXPORT_FORMATS[export_format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/individual-processes.csv")
async def export_individual_processes_csv(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """CSV of individual processes. Clients only get their company's rows."""
    return await export_individual_processes(user, db, "csv")


@router.get("/individual-processes.xlsx")
async def export_individual_processes_xlsx(
    user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Excel workbook with the same rows as the CSV export"""
    return await export_individual_processes(user, db, "xlsx")
