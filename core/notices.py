# core/notices.py

from core.config import settings
from models.enums import NoticeLevel
from models.notice import Notice


def notice(level: NoticeLevel, text: str) -> Notice:
    return Notice(
        level=level,
        text=text,
        dismiss_after_seconds=settings.NOTICE_DISMISS_SECONDS,
    )


def success(text: str) -> Notice:
    return notice(NoticeLevel.success, text)


def error(text: str) -> Notice:
    return notice(NoticeLevel.error, text)


def info(text: str) -> Notice:
    return notice(NoticeLevel.info, text)
