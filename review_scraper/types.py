from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union


@dataclass
class Review:
    author: Optional[str]
    timestamp: Optional[str]
    body_text: Optional[str]
    rating_value: Optional[float]
    verified_purchase: Optional[bool]
    recommendation_status: Optional[str]


@dataclass(frozen=True)
class PageRequest:
    page_index: int
    retry_count: int = 0


@dataclass(frozen=True)
class Records:
    items: List[dict]
    declared_total_pages: Optional[int] = None


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Malformed:
    reason: str


@dataclass(frozen=True)
class TransportFailure:
    cause: Exception


PageResult = Union[Records, Empty, Malformed, TransportFailure]


class RunStatus(Enum):
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class AggregateState:
    records: List[Review] = field(default_factory=list)
    total_pages_known: Optional[int] = None
    last_page_attempted: int = 0
    attempts: int = 0
    status: RunStatus = RunStatus.DONE
    failure: Optional[Any] = None
    output_path: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.status is RunStatus.ABORTED
