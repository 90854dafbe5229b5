"""CSV parsing and record normalization.

Turns the raw ``submissions.csv`` text into ``Problem`` records:

    parse_csv  → list of header→value dicts (one per non-blank line)
    parse_problems → list of ``Problem`` (rows without an id are dropped)

Degradation rules:
    - Missing trailing fields resolve to ``""``.
    - Unparseable ``submitted_at`` resolves to ``datetime.now()``.
    - Unparseable or empty ``done_at`` resolves to ``None``.
    - A non-numeric id drops that single row; the batch still loads.
"""

from __future__ import annotations

import csv
import logging
import re
from datetime import datetime

from evals_dashboard.config import ACCEPTED_STATUS_ALIASES, REJECTED_STATUS_ALIASES
from evals_dashboard.models import Problem, ProblemStatus

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})")
_ID_RE = re.compile(r"-?[0-9]+")


class InvalidRecordId(ValueError):
    """Raised when a row carries an id that is not a base-10 integer."""


# ── CSV ─────────────────────────────────────────────────────────────────────

def _split_line(line: str) -> list[str]:
    try:
        return next(csv.reader([line], strict=True))
    except csv.Error as exc:
        logger.warning("Malformed quoting (%s), splitting on commas: %r", exc, line)
        return line.split(",")


def parse_csv(
    text: str, expected_columns: list[str] | None = None
) -> list[dict[str, str]]:
    """Parse CSV text into one dict per data line, keyed by the header.

    Quoted fields are honoured, so a comma inside a quoted title does not
    shift the columns. Each line is parsed on its own: a quote never spans
    lines, and a line with broken quoting falls back to a plain comma split.
    Blank lines are skipped wherever they appear.
    """
    lines = [
        _split_line(line) for line in text.splitlines() if line.strip()
    ]
    if not lines:
        return []

    headers = [h.strip() for h in lines[0]]
    if expected_columns is not None and headers != expected_columns:
        logger.warning("Unexpected CSV header: %s", ",".join(headers))
    rows: list[dict[str, str]] = []
    for values in lines[1:]:
        rows.append({
            header: values[i].strip() if i < len(values) else ""
            for i, header in enumerate(headers)
        })
    return rows


# ── Field normalizers ───────────────────────────────────────────────────────

def normalize_status(raw: str) -> ProblemStatus:
    """Map a free-text status onto the closed ``ProblemStatus`` vocabulary."""
    s = raw.strip().lower()
    if s in ACCEPTED_STATUS_ALIASES:
        return ProblemStatus.ACCEPTED
    if s in REJECTED_STATUS_ALIASES:
        return ProblemStatus.REJECTED
    return ProblemStatus.PENDING


def _match_date(value: str) -> datetime | None:
    match = _DATE_RE.fullmatch(value.strip())
    if match is None:
        return None
    year, month, day = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def parse_date(value: str) -> datetime:
    """Parse ``YYYY-MM-DD`` into a midnight datetime.

    Anything else, including an empty string, yields the current time.
    """
    parsed = _match_date(value) if value else None
    if parsed is None:
        return datetime.now()
    return parsed


def parse_optional_date(value: str) -> datetime | None:
    """Like ``parse_date`` but returns ``None`` instead of "now"."""
    return _match_date(value) if value else None


def format_date(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_id(raw: str) -> int:
    s = raw.strip()
    if not _ID_RE.fullmatch(s):
        raise InvalidRecordId(f"Record id is not an integer: {raw!r}")
    return int(s, 10)


# ── Records ─────────────────────────────────────────────────────────────────

def parse_problem(row: dict[str, str]) -> Problem:
    """Build a ``Problem`` from one parsed CSV row.

    Raises ``InvalidRecordId`` when the id is not numeric.
    """
    problem_id = parse_id(row.get("id", ""))
    accession = row.get("data_accession", "")
    return Problem(
        id=problem_id,
        title=accession or f"#{row['id'].strip()}",
        description=row.get("title", ""),
        external_link=row.get("paper_url", ""),
        kit=row.get("kit", ""),
        contributor=row.get("engineer", ""),
        status=normalize_status(row.get("status", "")),
        submitted_at=parse_date(row.get("submitted_at", "")),
        reviewed_at=parse_optional_date(row.get("done_at", "")),
        reviewer=row.get("reviewer", ""),
        notes=row.get("notes", ""),
        data_url=row.get("data_url", ""),
    )


def parse_problems(rows: list[dict[str, str]]) -> list[Problem]:
    """Convert parsed CSV rows into ``Problem`` records.

    Rows without an id are filtered out. Rows with a non-numeric id are
    dropped with a warning so one bad row never blocks the rest.
    """
    problems: list[Problem] = []
    for row in rows:
        if not row.get("id"):
            continue
        try:
            problems.append(parse_problem(row))
        except InvalidRecordId as exc:
            logger.warning("Skipping row: %s", exc)
    return problems
