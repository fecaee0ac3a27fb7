"""Deployment decision policy.

Decides, for a group of destination files, whether to fetch fresh, back up and
overwrite, overwrite without a backup, skip, or abort. The policy never loses an
existing file silently: it is either backed up first or the operator declined
the backup explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from dotsetup.common import create_logger

from .models import Decision, ExistingFileState
from .protocol import Confirmer

logger = create_logger("deploy.policy")


@dataclass(frozen=True)
class PromptSet:
    """Questions asked when not forced, and what declining all of them means.

    Attributes:
        backup_prompt: Asked first when a destination exists (default answer: no).
        no_backup_prompt: Optional follow-up offering to overwrite without a backup.
        declined: Outcome when every question was declined (ABORT or SKIP).
        fresh_prompt: Optional question asked before a fresh fetch; declining skips.
    """

    backup_prompt: str
    no_backup_prompt: str | None = None
    declined: Decision = Decision.ABORT
    fresh_prompt: str | None = None

    def __post_init__(self) -> None:
        if self.declined not in (Decision.ABORT, Decision.SKIP):
            raise ValueError(f"declined must be ABORT or SKIP, got {self.declined.value}")


def decide(
    states: Sequence[ExistingFileState],
    *,
    force: bool,
    confirm: Confirmer | None,
    prompts: PromptSet,
) -> Decision:
    """Choose how to deploy a group of files.

    ``confirm`` is None for non-interactive runs, in which case every question is
    treated as declined.
    """
    exists = any(state.present for state in states)
    decision = _decide(exists, force=force, confirm=confirm, prompts=prompts)
    logger.debug("Deployment decision", exists=exists, force=force, decision=decision.value)
    return decision


def _decide(exists: bool, *, force: bool, confirm: Confirmer | None, prompts: PromptSet) -> Decision:
    if not exists:
        if force or prompts.fresh_prompt is None:
            return Decision.FRESH
        return Decision.FRESH if _ask(confirm, prompts.fresh_prompt, default=False) else Decision.SKIP

    if force:
        return Decision.BACKUP_THEN_OVERWRITE

    if _ask(confirm, prompts.backup_prompt, default=False):
        return Decision.BACKUP_THEN_OVERWRITE

    if prompts.no_backup_prompt is not None and _ask(confirm, prompts.no_backup_prompt, default=False):
        return Decision.OVERWRITE_NO_BACKUP

    return prompts.declined


def _ask(confirm: Confirmer | None, prompt: str, *, default: bool) -> bool:
    if confirm is None:
        return False
    return confirm(prompt, default)
