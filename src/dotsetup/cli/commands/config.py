from __future__ import annotations

import json
from enum import Enum
from typing import Annotated

import typer
import yaml

from dotsetup.config import ConfigError, FileConfigStore
from dotsetup.settings import settings


class OutputFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]

app = typer.Typer(
    help="Inspect dotsetup configuration.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def _config_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show(format: FormatOption = OutputFormat.YAML) -> None:
    """Print the effective configuration (config file plus environment overrides)."""
    store = FileConfigStore(settings.paths)
    result = store.load().map(lambda config: config.model_dump(mode="json"))
    if result.is_err():
        handle_config_error(result.unwrap_err())
        raise typer.Exit(code=1)

    typer.echo(_format_payload(result.unwrap(), format))


def _format_payload(payload: dict[str, object], format: OutputFormat) -> str:
    if format is OutputFormat.JSON:
        return json.dumps(payload, indent=2, sort_keys=True)
    return yaml.safe_dump(payload, sort_keys=True)


def handle_config_error(error: ConfigError) -> None:
    message = f"[{error.scope.value}] {error.message}"
    error_path = getattr(error, "path", None)
    if error_path is not None:
        message = f"{message} ({error_path})"

    typer.secho(message, err=True, fg=typer.colors.RED)
