# models/notice.py

from pydantic import BaseModel

from models.enums import NoticeLevel


class Notice(BaseModel):
    """Transient message the dashboard shows, then hides after a delay."""
    level: NoticeLevel
    text: str
    dismiss_after_seconds: int
