from __future__ import annotations

from pathlib import Path

import pytest
from conftest import ScriptedConfirmer

from dotsetup.deploy import BlockOutcome, ConfigBlock, append_block, ensure_block
from dotsetup.deploy.rcfile import git_prompt_block, is_configured, path_block, vi_alias_block

BLOCK = ConfigBlock(name="demo", markers=("demo-marker",), text="\n# demo-marker\nexport DEMO=1\n")


def _ensure(rc_file: Path, *, force: bool = False, confirm=None):
    return ensure_block(
        rc_file,
        BLOCK,
        force=force,
        confirm=confirm,
        add_prompt="Add it?",
        create_prompt="Create it?",
    )


def test_append_block_creates_missing_file(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"

    assert append_block(rc_file, BLOCK).unwrap() is True
    assert rc_file.read_text() == BLOCK.text


def test_append_block_is_idempotent(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("alias ll='ls -l'\n")

    assert append_block(rc_file, BLOCK).unwrap() is True
    assert append_block(rc_file, BLOCK).unwrap() is False

    assert rc_file.read_text().count("demo-marker") == 1


def test_append_block_adds_missing_trailing_newline(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("export EDITOR=vi")

    append_block(rc_file, BLOCK).unwrap()

    assert rc_file.read_text() == "export EDITOR=vi\n" + BLOCK.text


def test_any_marker_counts_as_configured(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text('PS1="$(__git_ps1)"\n')

    assert is_configured(rc_file, git_prompt_block()).unwrap() is True
    assert append_block(rc_file, git_prompt_block()).unwrap() is False


def test_missing_file_is_not_configured(tmp_path: Path) -> None:
    assert is_configured(tmp_path / "missing", BLOCK).unwrap() is False


def test_ensure_block_already_present_asks_nothing(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("# demo-marker\n")
    confirm = ScriptedConfirmer()

    assert _ensure(rc_file, confirm=confirm).unwrap() is BlockOutcome.ALREADY_PRESENT
    assert confirm.prompts == []


@pytest.mark.parametrize(
    ("exists", "prompt", "outcome"),
    [(True, "Add it?", BlockOutcome.APPENDED), (False, "Create it?", BlockOutcome.CREATED)],
)
def test_ensure_block_asks_the_matching_question(
    tmp_path: Path, exists: bool, prompt: str, outcome: BlockOutcome
) -> None:
    rc_file = tmp_path / ".bashrc"
    if exists:
        rc_file.write_text("# existing\n")
    confirm = ScriptedConfirmer(True)

    assert _ensure(rc_file, confirm=confirm).unwrap() is outcome
    assert confirm.prompts == [prompt]
    assert "demo-marker" in rc_file.read_text()


def test_ensure_block_declined_leaves_file_untouched(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("# existing\n")

    assert _ensure(rc_file, confirm=ScriptedConfirmer(False)).unwrap() is BlockOutcome.DECLINED
    assert rc_file.read_text() == "# existing\n"


def test_ensure_block_declined_does_not_create_file(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"

    assert _ensure(rc_file, confirm=None).unwrap() is BlockOutcome.DECLINED
    assert not rc_file.exists()


def test_ensure_block_forced_skips_question(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"

    assert _ensure(rc_file, force=True, confirm=ScriptedConfirmer()).unwrap() is BlockOutcome.CREATED


def test_unreadable_rc_file_is_an_error(tmp_path: Path) -> None:
    rc_file = tmp_path / ".bashrc"
    rc_file.mkdir()

    result = _ensure(rc_file, force=True)

    assert result.is_err()
    assert result.unwrap_err().path == rc_file


def test_git_prompt_block_sources_both_scripts() -> None:
    text = git_prompt_block().text

    assert 'source "$HOME/.git-completion.bash"' in text
    assert 'source "$HOME/.git-prompt.sh"' in text
    assert "__git_ps1" in text


def test_path_block_exports_prefix_bin() -> None:
    block = path_block(Path("/home/me/local"))

    assert block.markers == ("/home/me/local/bin",)
    assert 'export PATH="/home/me/local/bin:$PATH"' in block.text


def test_vi_alias_block() -> None:
    assert vi_alias_block().text == "alias vi='vim'\n"
