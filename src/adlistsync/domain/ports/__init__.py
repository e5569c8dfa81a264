"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CandidateFetcher
from .persistence import AdlistRepository, GroupRepository, MembershipRepository
from .unit_of_work import AdlistRepositories, AdlistUnitOfWork

__all__ = [
    "AdlistRepositories",
    "AdlistRepository",
    "AdlistUnitOfWork",
    "CandidateFetcher",
    "GroupRepository",
    "MembershipRepository",
]
