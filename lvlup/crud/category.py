from __future__ import annotations
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from lvlup.models.category import Category


def get_categories_by_user(db: Session, user_id: str) -> list[Category]:
    return db.query(Category).filter(Category.user_id == user_id).order_by(func.lower(Category.name).asc()).all()


def get_category_by_name(db: Session, user_id: str, name: str) -> Optional[Category]:
    return db.query(Category).filter(
        Category.user_id == user_id,
        func.lower(Category.name) == name.lower()
    ).first()


def create_category(db: Session, user_id: str, name: str) -> Category:
    """
    Create a category for a user.

    Raises:
        ValueError: If the trimmed name is empty or already used by this user
    """
    name = name.strip()
    if not name:
        raise ValueError("Category name cannot be empty")
    if get_category_by_name(db, user_id, name):
        raise ValueError(f"Category '{name}' already exists")

    db_category = Category(user_id=user_id, name=name)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def delete_category(db: Session, category_id: str, user_id: str) -> bool:
    category = db.query(Category).filter(Category.id == category_id, Category.user_id == user_id).first()
    if not category:
        return False
    db.delete(category)
    db.commit()
    return True
