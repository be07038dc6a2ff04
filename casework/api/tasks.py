"""
Task API endpoints
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from casework.core.database import get_db
from casework.core.security import require_admin
from casework.models.enums import TaskStatus
from casework.models.process import IndividualProcess, MainProcess
from casework.models.task import Task
from casework.models.user import UserProfile
from casework.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from casework.utils.lookups import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    task_data: TaskCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a task linked to an individual and/or main process.

    Raises:
        HTTPException 404: If a linked process or the assignee does not exist
    """
    if task_data.individual_process_id:
        await get_or_404(db, IndividualProcess, task_data.individual_process_id, "Individual process")
    if task_data.main_process_id:
        await get_or_404(db, MainProcess, task_data.main_process_id, "Main process")
    if task_data.assigned_to:
        await get_or_404(db, UserProfile, task_data.assigned_to, "User")

    new_task = Task(created_by=admin.id, status=TaskStatus.TODO, **task_data.model_dump())

    db.add(new_task)
    await db.flush()
    await db.refresh(new_task)

    return new_task


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status: Optional[TaskStatus] = None,
    assigned_to: Optional[str] = None,
    individual_process_id: Optional[str] = None,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    query = select(Task).order_by(Task.due_date, Task.created_at)

    if status is not None:
        query = query.where(Task.status == status)
    if assigned_to:
        query = query.where(Task.assigned_to == assigned_to)
    if individual_process_id:
        query = query.where(Task.individual_process_id == individual_process_id)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/overdue", response_model=List[TaskResponse])
async def list_overdue_tasks(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Open tasks whose due date has passed"""
    result = await db.execute(
        select(Task)
        .where(
            Task.due_date < date.today(),
            Task.status.not_in([TaskStatus.COMPLETED, TaskStatus.CANCELLED])
        )
        .order_by(Task.due_date)
    )
    return result.scalars().all()


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await get_or_404(db, Task, task_id)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Update a task. Completing it records who completed it and when;
    reopening it clears both.

    Raises:
        HTTPException 404: If task not found
    """
    task = await get_or_404(db, Task, task_id)
    changes = task_data.model_dump(exclude_unset=True)

    for field, value in changes.items():
        setattr(task, field, value)

    if "status" in changes:
        if task.status == TaskStatus.COMPLETED:
            if task.completed_at is None:
                task.completed_at = datetime.utcnow()
                task.completed_by = admin.id
                logger.info("Task %s completed by %s", task.id, admin.id)
        else:
            task.completed_at = None
            task.completed_by = None

    await db.flush()
    await db.refresh(task)
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    task = await get_or_404(db, Task, task_id)
    await db.delete(task)
    await db.flush()
