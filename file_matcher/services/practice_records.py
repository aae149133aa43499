"""Practice activity log for the trainers."""

from datetime import date
from typing import Any, Optional

from ..models.user import PracticeRecord, PracticeStats, ToolType, User


class PracticeRecordStore:
    def __init__(self):
        self._records: list[PracticeRecord] = []

    def record(
        self,
        user: User,
        tool_type: ToolType,
        action: str,
        details: Optional[dict[str, Any]] = None,
    ) -> PracticeRecord:
        rec = PracticeRecord(
            user_id=user.id,
            username=user.username,
            tool_type=tool_type,
            action=action,
            details=details,
        )
        self._records.append(rec)
        return rec

    def list_records(self, user_id: Optional[str] = None) -> list[PracticeRecord]:
        if user_id:
            return [r for r in self._records if r.user_id == user_id]
        return list(self._records)

    def by_date(self, day: date, user_id: Optional[str] = None) -> list[PracticeRecord]:
        return [r for r in self.list_records(user_id) if r.timestamp.date() == day]

    def stats(self, user_id: Optional[str] = None) -> PracticeStats:
        records = self.list_records(user_id)
        stats = PracticeStats(
            total=len(records),
            by_tool={t.value: 0 for t in ToolType},
        )
        for r in records:
            stats.by_tool[r.tool_type.value] += 1
            day = r.timestamp.date().isoformat()
            stats.by_date[day] = stats.by_date.get(day, 0) + 1
        return stats


# Singleton
practice_records = PracticeRecordStore()
