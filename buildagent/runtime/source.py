"""Read-only inspection of a cloned repository."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from git import Repo
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SourceRevision:
    """Commit that HEAD resolved to after checkout."""

    commit: str
    committed_at: datetime
    tags: List[str] = field(default_factory=list)

    @property
    def short_commit(self) -> str:
        return self.commit[:8]


def inspect_checkout(path: Path) -> Optional[SourceRevision]:
    """
    Describe the commit checked out at path.

    Returns None when path is not a readable git working tree; the build does
    not depend on this information.
    """
    try:
        repo = Repo(path)
        head = repo.head.commit
        tags = sorted(tag.name for tag in repo.tags if tag.commit == head)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        logger.warning("Cannot inspect checkout at %s: %s", path, exc)
        return None
    except (GitError, ValueError) as exc:
        # ValueError: HEAD points at an unborn branch.
        logger.warning("Cannot resolve HEAD in %s: %s", path, exc)
        return None

    return SourceRevision(
        commit=head.hexsha,
        committed_at=head.committed_datetime,
        tags=tags,
    )
