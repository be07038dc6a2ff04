"""
Lookup helpers shared by the API routers
"""
from typing import Type, TypeVar
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


async def get_or_404(db: AsyncSession, model: Type[ModelT], entity_id: str, name: str = None) -> ModelT:
    """
    Fetch a row by primary key.

    Raises:
        HTTPException 404: If no row has that id
    """
    instance = await db.get(model, entity_id)
    if instance is None:
        raise HTTPException(
            status_code=404,
            detail=f"{name or model.__name__} with id {entity_id} not found"
        )
    return instance
