"""CLI commands for renamer.

- ``rename``: build a rename plan for a directory and apply (or preview) it.
- ``config``: show or persist default settings.
- ``version``: print the installed version.

Design:
- Typer app is instantiated at module level; options are declared with
  Annotated for type safety and help text.
- All output is routed through a Rich Console obtained from ConsoleManager.
- Precondition failures (invalid options, missing ffprobe) abort before any
  file is touched and exit with ExitCode.ERROR.
"""

import json
import sys
from enum import Enum
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from renamer.cli.console import ConsoleManager
from renamer.core.apply import apply_plan
from renamer.core.planner import build_rename_plan
from renamer.core.resolution import ResolutionProber
from renamer.errors import ConfigError, ProbeUnavailableError
from renamer.models.config import RenameConfig, build_replacer
from renamer.utils import config as settings
from renamer.utils.debug import debug, setup_logger
from renamer.utils.json import DateTimeEncoder

app = typer.Typer(
    name="renamer",
    help="Batch rename the files of a directory.",
    add_completion=False,
)
config_app = typer.Typer(help="Show or change default settings.")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    PARTIAL_FAILURE = 2


PATH = Annotated[
    str,
    typer.Option(
        "--path",
        "-p",
        help="Path to the directory to rename files in, empty to use current directory",
    ),
]
PREFIX = Annotated[str, typer.Option("--prefix", help="Prefix to add to the file name")]
SUFFIX = Annotated[str, typer.Option("--suffix", help="Suffix to add to the file name")]
OVERRIDE = Annotated[
    str,
    typer.Option(
        "--override",
        help="Override the file name with the given name, '<empty>' to drop it",
    ),
]
SEPARATOR = Annotated[
    Optional[str],
    typer.Option(
        "--separator",
        help="Separator between the prefix, suffix and the original file name "
        "(default: _)",
    ),
]
ALLOW_DIR = Annotated[
    bool, typer.Option("--allow-dir", help="Allow renaming directories")
]
CREATED_DATE = Annotated[
    str,
    typer.Option(
        "--created-date",
        help="Add created date with the given format (tokens Y M D h m s f, "
        "e.g. Y-M-D); prefix with 'suffix' to append",
    ),
]
DETECT_RESOLUTION = Annotated[
    str,
    typer.Option(
        "--detect-resolution",
        help="Add WxH to photo & video file names: prefix or suffix",
    ),
]
ASPECT_RATIO = Annotated[
    bool,
    typer.Option(
        "--aspect-ratio",
        help="Follow the detected resolution with its reduced aspect ratio",
    ),
]
INCLUDE = Annotated[
    str, typer.Option("--include", help="Only rename files that match the given regex")
]
EXCLUDE = Annotated[
    str, typer.Option("--exclude", help="Exclude files that match the given regex")
]
REPLACE = Annotated[
    str,
    typer.Option(
        "--replace",
        help="Replace the given regex with the given text, format: old=new",
    ),
]
UNIQUE_SUFFIX = Annotated[
    bool,
    typer.Option(
        "--unique-suffix",
        help="Add a unique suffix to the file name to avoid duplicate file names",
    ),
]
DRY_RUN = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Display the files that will be renamed without renaming them",
    ),
]
YES = Annotated[
    bool,
    typer.Option(
        "--yes",
        "-y",
        help="Skip confirmation prompt and proceed with renaming",
    ),
]
JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Print the plan as JSON (requires --dry-run)"),
]
NO_RICH = Annotated[
    bool,
    typer.Option("--no-rich", help="Disable coloured output"),
]


@app.command()
def rename(  # noqa: PLR0913
    path: PATH = "",
    prefix: PREFIX = "",
    suffix: SUFFIX = "",
    override: OVERRIDE = "",
    separator: SEPARATOR = None,
    allow_dir: ALLOW_DIR = False,
    created_date: CREATED_DATE = "",
    detect_resolution: DETECT_RESOLUTION = "",
    aspect_ratio: ASPECT_RATIO = False,
    include: INCLUDE = "",
    exclude: EXCLUDE = "",
    replace: REPLACE = "",
    unique_suffix: UNIQUE_SUFFIX = False,
    dry_run: DRY_RUN = False,
    yes: YES = False,
    json_output: JSON_OUTPUT = False,
    no_rich: NO_RICH = False,
) -> None:
    """Rename the files of a directory.

    Example: renamer rename -p /path/to/directory --prefix IMG
    """
    setup_logger()
    with ConsoleManager(force_use=False if no_rich else None) as console:
        try:
            config = RenameConfig(
                path=path,
                prefix=prefix,
                suffix=suffix,
                override=override,
                separator=(
                    separator
                    if separator is not None
                    else settings.get_default_separator()
                ),
                include=include,
                exclude=exclude,
                replace=replace,
                created_date=created_date,
                detect_resolution=detect_resolution,
                aspect_ratio=aspect_ratio,
                allow_dir=allow_dir,
                unique_suffix=unique_suffix,
                dry_run=dry_run,
                yes=yes,
            )
            replacer = build_replacer(config.replace)
            debug(f"Rename options: {config.model_dump()}")
            if json_output and not config.dry_run:
                raise ConfigError("--json requires --dry-run")
        except ValidationError as e:
            for err in e.errors():
                field = ".".join(str(loc) for loc in err["loc"]) or "options"
                console.print(
                    f"Error: {field}: {err['msg']}",
                    style="red",
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )
            raise typer.Exit(ExitCode.ERROR)
        except ConfigError as e:
            console.print(
                f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True
            )
            raise typer.Exit(ExitCode.ERROR)

        prober = None
        if config.probes_resolution:
            prober = ResolutionProber(
                ffprobe=settings.resolve_setting(
                    "probe.ffprobe", default=settings.DEFAULT_FFPROBE
                ),
                timeout=settings.resolve_setting(
                    "probe.timeout", default=settings.DEFAULT_PROBE_TIMEOUT
                ),
            )
            try:
                prober.require()
            except ProbeUnavailableError as e:
                console.print(
                    str(e), style="red", markup=False, highlight=False, soft_wrap=True
                )
                raise typer.Exit(ExitCode.ERROR)

        with console.status("Processing...", spinner="dots"):
            plan = build_rename_plan(
                config.root_dir(),
                config,
                replacer,
                prober=prober,
                max_workers=settings.resolve_setting(
                    "probe.max_workers", default=settings.DEFAULT_MAX_WORKERS
                ),
            )

        if len(plan) == 0:
            console.print("No files to rename!", style="yellow")
            raise typer.Exit(ExitCode.SUCCESS)

        if json_output:
            sys.stdout.write(
                json.dumps(plan.model_dump(), cls=DateTimeEncoder, indent=2) + "\n"
            )
            raise typer.Exit(ExitCode.SUCCESS)

        result = apply_plan(plan, config, console=console)
        debug(f"Applied plan {plan.id} in {result.duration:.3f}s")
        if result.failed:
            raise typer.Exit(ExitCode.PARTIAL_FAILURE)


@config_app.command("show")
def config_show() -> None:
    """Print the effective settings and where they are stored."""
    with ConsoleManager() as console:
        console.print(f"Config file: {settings.CONFIG_FILE}", markup=False, highlight=False)
        for key, value in settings.effective_settings().items():
            console.print(f"{key} = {value!r}", markup=False, highlight=False)


@config_app.command("set-separator")
def config_set_separator(
    separator: Annotated[str, typer.Argument(help="Default separator")],
) -> None:
    """Persist the separator used when --separator is omitted."""
    settings.set_default_separator(separator)
    with ConsoleManager() as console:
        console.print(f"Default separator set to {separator!r}", markup=False, highlight=False)


@app.command()
def version() -> None:
    """Show the version of renamer."""
    from renamer.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"Renamer version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
