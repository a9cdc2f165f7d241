# country_console/utils/notices.py

import itertools
import time
from typing import Callable, List, Optional

from country_console.core.config import settings
from country_console.schemas.notices import Notice, NoticeLevel


class NoticeBoard:
    """
    Transient notices, newest first.
    A notice disappears once its ttl has elapsed or when it is dismissed.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = settings.NOTICE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.clock = clock
        self._notices: List[Notice] = []
        self._ids = itertools.count(1)

    def add(self, message: str, level: NoticeLevel) -> Notice:
        notice = Notice(id=next(self._ids), message=message, level=level, created_at=self.clock())
        self._notices.insert(0, notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.add(message, NoticeLevel.success)

    def danger(self, message: str) -> Notice:
        return self.add(message, NoticeLevel.danger)

    def dismiss(self, notice_id: int) -> bool:
        before = len(self._notices)
        self._notices = [n for n in self._notices if n.id != notice_id]
        return len(self._notices) != before

    def active(self) -> List[Notice]:
        now = self.clock()
        self._notices = [n for n in self._notices if now - n.created_at < self.ttl_seconds]
        return list(self._notices)
