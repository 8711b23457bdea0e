from dataclasses import dataclass
from typing import Iterator, Optional

from pydantic import BaseModel

from app.core.enums import LoadStatus
from app.models.vehicle import VehicleRecord


@dataclass(frozen=True)
class DatasetSnapshot:
    """Point-in-time, read-only list of vehicle records."""

    records: tuple[VehicleRecord, ...]
    source: str = "static"
    rejected: int = 0

    def __iter__(self) -> Iterator[VehicleRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


class LoadOutcome(BaseModel):
    status: LoadStatus
    source: str
    record_count: int = 0
    rejected_count: int = 0
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.status == LoadStatus.READY
