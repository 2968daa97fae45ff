from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from zero_3rdparty.datetime_utils import utc_now

from kac_bump.change_types import ChangeType


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    change_type: ChangeType
    description: str

    def __str__(self) -> str:
        return f"{self.change_type.label}: {self.description}"


class Bump(BaseModel):
    version: str
    date: datetime = Field(default_factory=utc_now)
    logs: list[LogEntry] = Field(default_factory=list)

    def add_log(self, change_type: ChangeType, description: str) -> LogEntry:
        log = LogEntry(change_type=change_type, description=description)
        self.logs.append(log)
        return log


class EntryResult(BaseModel):
    log: LogEntry
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CreateResult(BaseModel):
    path: Path
    version: str
    entries: list[EntryResult] = Field(default_factory=list)

    @property
    def added(self) -> list[LogEntry]:
        return [entry.log for entry in self.entries if entry.ok]

    @property
    def skipped(self) -> list[EntryResult]:
        return [entry for entry in self.entries if not entry.ok]
