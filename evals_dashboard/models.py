"""Domain models for the Evaluations Dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ProblemStatus(str, Enum):
    """Closed review-status vocabulary."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_reviewed(self) -> bool:
        return self is not ProblemStatus.PENDING


class PollMode(str, Enum):
    NORMAL = "normal"
    FAST = "fast"


@dataclass
class Problem:
    """One reviewable submission parsed from a CSV row."""

    id: int
    title: str
    description: str
    external_link: str
    kit: str
    contributor: str
    status: ProblemStatus
    submitted_at: datetime
    reviewed_at: datetime | None = None
    reviewer: str = ""
    notes: str = ""
    data_url: str = ""

    @property
    def attributed_at(self) -> datetime:
        """Date used for revenue attribution; falls back to ``submitted_at``."""
        return self.reviewed_at or self.submitted_at


@dataclass
class ContributorRollup:
    """Per-contributor leaderboard entry."""

    name: str
    accepted_count: int = 0
    last_submitted_at: datetime = datetime.min


@dataclass
class Stats:
    """Summary counts over the whole dataset."""

    pending_count: int
    accepted_count: int
    rejected_count: int
    reviewed_count: int
    acceptance_rate: int
    total_contributors: int


@dataclass
class Snapshot:
    """Everything derived from one raw CSV text."""

    problems: list[Problem]
    contributors: list[ContributorRollup]
    stats: Stats


@dataclass
class Order:
    """A client order, maintained by hand."""

    id: int
    client: str
    display_code: str
    order_name: str
    problem_count: int
    due_date: date
    delivered_date: date | None
    completed: bool


@dataclass
class SyncState:
    last_sync_timestamp: datetime | None = None
    is_syncing: bool = False
    poll_mode: PollMode = PollMode.NORMAL
