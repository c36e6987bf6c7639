"""Thin CLI wrapper for forge_resource.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from forge_resource import __version__
from forge_resource.config import get_settings, print_settings_json
from forge_resource.errors import ResourcePluginError

app = typer.Typer(
    name="forge-resource",
    help="Forge Resource - build, stage and publish external artifacts for packaging",
    no_args_is_help=True,
)
console = Console()

RUN_MODES = ("start", "package")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"forge-resource version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Forge Resource - build, stage and publish external artifacts for packaging."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _fail(error: ResourcePluginError) -> None:
    console.print(f"[red]Error ({error.code}): {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings), soft_wrap=True, markup=False)
    else:
        tmp_dir_display = (
            str(settings.tmp_dir) if settings.tmp_dir else "(system default)"
        )
        build_timeout_display = (
            str(settings.build_timeout) if settings.build_timeout else "(none)"
        )
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print(f"  Temp directory:      {tmp_dir_display}")
        console.print(f"  Log level:           {settings.log_level}")
        console.print(f"  Build timeout:       {build_timeout_display}")
        console.print(f"  Shell:               {settings.shell or '(system default)'}")


@app.command()
def check(
    config_file: Annotated[
        Path,
        typer.Argument(help="Resource configuration file (YAML or JSON)"),
    ],
    workdir: Annotated[
        Path | None,
        typer.Option("--workdir", "-C", help="Directory relative paths resolve against"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Report whether the resource target needs rebuilding."""
    from forge_resource.builds.staleness import needs_rebuild
    from forge_resource.resource.io import load_resource_config

    try:
        spec = load_resource_config(config_file).to_spec()
        stale = needs_rebuild(spec, workdir)
    except ResourcePluginError as e:
        _fail(e)
        return

    if json_output:
        output = {"target": str(spec.target_path), "needs_rebuild": stale}
        console.print(json.dumps(output, indent=2), soft_wrap=True, markup=False)
    elif stale:
        console.print(f"[yellow]Stale:[/yellow] {spec.target_path}")
    else:
        console.print(f"[green]Fresh:[/green] {spec.target_path}")


@app.command()
def run(
    config_file: Annotated[
        Path,
        typer.Argument(help="Resource configuration file (YAML or JSON)"),
    ],
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Host command to emulate: start or package"),
    ] = "start",
    workdir: Annotated[
        Path | None,
        typer.Option("--workdir", "-C", help="Project working directory"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Drive the full resource lifecycle the way a host would."""
    from forge_resource.host.downstream import ForgeConfig
    from forge_resource.plugin.resource_plugin import (
        GENERATE_ASSETS,
        PRE_PACKAGE,
        RESOLVE_CONFIGURATION,
        ResourcePlugin,
    )
    from forge_resource.resource.io import load_resource_config

    if mode not in RUN_MODES:
        console.print(f"[red]Unknown mode: {mode} (expected start or package)[/red]")
        raise typer.Exit(code=2)

    environ: dict[str, str] = {}
    try:
        plugin = ResourcePlugin(
            load_resource_config(config_file),
            argv=["forge-resource", mode],
            environ=environ,
        )
        plugin.init(workdir or Path.cwd())
        forge_config = plugin.hooks[RESOLVE_CONFIGURATION](ForgeConfig())
        plugin.hooks[GENERATE_ASSETS]()
        if mode == "package":
            plugin.hooks[PRE_PACKAGE]()
    except ResourcePluginError as e:
        _fail(e)
        return

    coordinator = plugin.coordinator
    binding_name = coordinator.spec.binding_name
    result = {
        "binding": binding_name,
        "value": environ.get(binding_name),
        "extra_resource": forge_config.packager_config.extra_resource,
        "staging_dir": str(coordinator.staging_dir) if coordinator.staging_dir else None,
    }
    if json_output:
        console.print(json.dumps(result, indent=2), soft_wrap=True, markup=False)
    else:
        console.print(f"[green]{binding_name}[/green]={result['value']}")
        console.print(f"  Extra resource: {result['extra_resource']}")
        if result["staging_dir"]:
            console.print(f"  Staged into:    {result['staging_dir']}")


__all__ = ["app"]
