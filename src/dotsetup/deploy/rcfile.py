"""Idempotent configuration blocks in shell resource files."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import RcFileError
from .protocol import Confirmer

logger = create_logger("deploy.rcfile")


class ConfigBlock(BaseModel):
    """A snippet appended to a shell resource file at most once.

    The block counts as present when any of ``markers`` occurs anywhere in the
    file, so hand-written equivalents are respected too.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    markers: tuple[str, ...] = Field(min_length=1)
    text: str


class BlockOutcome(str, Enum):
    ALREADY_PRESENT = "already-present"
    APPENDED = "appended"
    CREATED = "created"
    DECLINED = "declined"


def is_configured(rc_file: Path, block: ConfigBlock) -> Result[bool, RcFileError]:
    if not rc_file.exists():
        return Ok(False)

    try:
        content = rc_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        return Err(RcFileError(path=rc_file, message=f"Failed to read {rc_file}: {e}"))

    return Ok(any(marker in content for marker in block.markers))


def append_block(rc_file: Path, block: ConfigBlock) -> Result[bool, RcFileError]:
    """Append ``block`` unless already configured. Returns whether it was written."""
    configured = is_configured(rc_file, block)
    if configured.is_err() or configured.unwrap():
        return configured.map(lambda _: False)

    try:
        prefix = ""
        if rc_file.exists():
            with rc_file.open("rb") as handle:
                if handle.seek(0, 2) > 0:
                    handle.seek(-1, 2)
                    if handle.read(1) != b"\n":
                        prefix = "\n"
        else:
            rc_file.parent.mkdir(parents=True, exist_ok=True)

        text = block.text if block.text.endswith("\n") else f"{block.text}\n"
        with rc_file.open("a", encoding="utf-8") as handle:
            handle.write(prefix + text)
    except OSError as e:
        logger.error("Failed to append config block", block=block.name, path=str(rc_file), error=str(e))
        return Err(RcFileError(path=rc_file, message=f"Failed to update {rc_file}: {e}"))

    logger.info("Config block appended", block=block.name, path=str(rc_file))
    return Ok(True)


def ensure_block(
    rc_file: Path,
    block: ConfigBlock,
    *,
    force: bool,
    confirm: Confirmer | None,
    add_prompt: str,
    create_prompt: str,
) -> Result[BlockOutcome, RcFileError]:
    """Make sure ``block`` is in ``rc_file``, asking first unless forced.

    A missing resource file is created only after ``create_prompt`` is accepted
    (default yes); an existing one is extended after ``add_prompt`` (default yes).
    """
    configured = is_configured(rc_file, block)
    if configured.is_err():
        return Err(configured.unwrap_err())
    if configured.unwrap():
        return Ok(BlockOutcome.ALREADY_PRESENT)

    existed = rc_file.exists()
    if not force:
        prompt = add_prompt if existed else create_prompt
        if confirm is None or not confirm(prompt, True):
            logger.info("Config block declined", block=block.name, path=str(rc_file))
            return Ok(BlockOutcome.DECLINED)

    outcome = BlockOutcome.APPENDED if existed else BlockOutcome.CREATED
    return append_block(rc_file, block).map(lambda written: outcome if written else BlockOutcome.ALREADY_PRESENT)


def git_prompt_block() -> ConfigBlock:
    return ConfigBlock(
        name="git-prompt",
        markers=(".git-completion.bash", ".git-prompt.sh", "__git_ps1"),
        text=GIT_PROMPT_SNIPPET,
    )


def path_block(prefix: Path) -> ConfigBlock:
    bin_dir = prefix / "bin"
    return ConfigBlock(
        name="vim-path",
        markers=(str(bin_dir),),
        text=f'\n# vim (source build)\nexport PATH="{bin_dir}:$PATH"\n',
    )


def vi_alias_block() -> ConfigBlock:
    return ConfigBlock(name="vi-alias", markers=("alias vi='vim'",), text="alias vi='vim'\n")


GIT_PROMPT_SNIPPET = r"""
# Git prompt configuration (added by dotsetup)
if [ -f "$HOME/.git-completion.bash" ]; then
    source "$HOME/.git-completion.bash"
fi
if [ -f "$HOME/.git-prompt.sh" ]; then
    source "$HOME/.git-prompt.sh"
    GIT_PS1_SHOWDIRTYSTATE=true
    export PS1='[\u@\h \[\033[01;33m\]\w\[\033[01;31m\]$(__git_ps1 " (%s)")\[\e[m\]]\$ '
fi
"""
