from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Session
from lvlup.models.journal_entry import JournalEntry


def create_journal_entry(db: Session, user_id: str, title: str, content: str) -> JournalEntry:
    db_entry = JournalEntry(user_id=user_id, title=title, content=content)
    db.add(db_entry)
    db.commit()
    db.refresh(db_entry)
    return db_entry


def get_journal_entries_by_user(db: Session, user_id: str, skip: int = 0, limit: int = 100) -> list[JournalEntry]:
    """
    Get journal entries for a specific user.

    Args:
        db: Database session
        user_id: User ID to get entries for
        skip: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        List of JournalEntry objects, newest first
    """
    return db.query(JournalEntry).filter(
        JournalEntry.user_id == user_id
    ).order_by(JournalEntry.created_at.desc()).offset(skip).limit(limit).all()


def get_journal_entry(db: Session, entry_id: str, user_id: str) -> Optional[JournalEntry]:
    """Get a specific journal entry by ID for a specific user"""
    return db.query(JournalEntry).filter(
        JournalEntry.id == entry_id,
        JournalEntry.user_id == user_id
    ).first()


def delete_journal_entry(db: Session, entry_id: str, user_id: str) -> bool:
    entry = get_journal_entry(db, entry_id, user_id)
    if not entry:
        return False
    db.delete(entry)
    db.commit()
    return True
