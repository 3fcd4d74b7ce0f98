from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.schemas import CurrentUser, CategoryCreate, CategoryResponse
from lvlup import crud
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryResponse])
async def list_categories(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's habit categories, alphabetically."""
    return crud.get_categories_by_user(db, current_user.id)


@router.post("/", response_model=CategoryResponse, status_code=201)
async def create_category(
    category_in: CategoryCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        category = crud.create_category(db, current_user.id, category_in.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Created category {category.id} for user {current_user.id}")
    return category


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not crud.delete_category(db, category_id, current_user.id):
        raise HTTPException(status_code=404, detail="Category not found")
