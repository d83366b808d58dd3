"""Configuration for a single board fetch."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timedelta

# The default cutoff is noon on the day two weeks before the fetch.
DEFAULT_CUTOFF_DAYS = 14
DEFAULT_CUTOFF_HOUR = 12


def default_cutoff(now: datetime | None = None) -> datetime:
    """Noon (local time) fourteen days before ``now``."""
    if now is None:
        now = datetime.now().astimezone()
    target = now - timedelta(days=DEFAULT_CUTOFF_DAYS)
    return target.replace(hour=DEFAULT_CUTOFF_HOUR, minute=0, second=0, microsecond=0)


def get_github_token() -> str:
    """Get GitHub token from environment or gh CLI."""
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""


@dataclass(frozen=True)
class BoardQuery:
    """Everything needed to fetch and tabulate one project board.

    Attributes:
        organization: Organization login that owns the project.
        project_name: Project name search string; the first match is used.
        api_key: GitHub token used for the GraphQL requests.
        cutoff: Instant used to determine each issue's previous column.
        add_notes_column: Whether rendered tables get an extra blank Notes column.
    """

    organization: str
    project_name: str
    api_key: str = field(default="", repr=False)
    cutoff: datetime = field(default_factory=default_cutoff)
    add_notes_column: bool = False

    def __post_init__(self) -> None:
        if not self.organization:
            raise ValueError("organization is required")
        if self.cutoff.tzinfo is None:
            # Naive cutoffs are wall-clock times in the local zone.
            object.__setattr__(self, "cutoff", self.cutoff.astimezone())
