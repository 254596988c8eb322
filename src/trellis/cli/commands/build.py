from pathlib import Path
from typing import Optional

import typer

from trellis.app import StructureBuilder
from trellis.cli.factories import make_build_config, read_structure
from trellis.cli.rendering import CliRenderer
from trellis.common import bus
from trellis.needle import L
from trellis.spec import ConfigError, StructureRootError

STRUCTURE_ARG = typer.Argument(
    ..., help="File describing the structure, or '-' to read standard input."
)
ROOT_ARG = typer.Argument(Path("."), help="Directory to create the structure in.")


def _load_inputs(ctx: typer.Context, structure: str, **overrides) -> tuple:
    verbose = bool((ctx.obj or {}).get("verbose", False))
    try:
        config = make_build_config(verbose=verbose, **overrides)
    except ConfigError as e:
        bus.error(L.cli.error.config, error=e)
        raise typer.Exit(code=1)
    if config.verbose and not verbose:
        bus.set_renderer(CliRenderer(verbose=True))

    try:
        text = read_structure(structure)
    except (OSError, UnicodeDecodeError) as e:
        bus.error(L.cli.error.input, path=structure, error=e)
        raise typer.Exit(code=1)
    return config, text


def build_command(
    ctx: typer.Context,
    structure: str = STRUCTURE_ARG,
    root: Path = ROOT_ARG,
    search: Optional[str] = typer.Option(
        None, "--search", help="Literal text to find in entry names."
    ),
    replace: Optional[str] = typer.Option(
        None, "--replace", help="Text that replaces the first match of --search."
    ),
    replace_files: Optional[bool] = typer.Option(
        None,
        "--replace-files/--no-replace-files",
        help="Apply the substitution to file names.",
    ),
    replace_folders: Optional[bool] = typer.Option(
        None,
        "--replace-folders/--no-replace-folders",
        help="Apply the substitution to directory names.",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 1 when the build produced warnings."
    ),
):
    config, text = _load_inputs(
        ctx,
        structure,
        search=search,
        replace=replace,
        replace_files=replace_files,
        replace_folders=replace_folders,
    )

    try:
        result = StructureBuilder(config).build(text, root)
    except StructureRootError as e:
        bus.error(L.cli.error.root, error=e)
        raise typer.Exit(code=1)

    if strict and not result.success:
        raise typer.Exit(code=1)


def plan_command(
    ctx: typer.Context,
    structure: str = STRUCTURE_ARG,
    root: Path = ROOT_ARG,
):
    config, text = _load_inputs(ctx, structure)
    steps = StructureBuilder(config).preview(text, root)
    if not steps:
        bus.info(L.cli.plan.empty)
        return
    for step in steps:
        bus.info(L.cli.plan.step, description=step.describe())
