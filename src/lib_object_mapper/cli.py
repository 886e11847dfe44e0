"""CLI adapter for ``lib_object_mapper`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the mapper on the command line so operators can map structured payload
files onto model classes and inspect effective settings without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_settings` – prints the settings read from the environment.
* :func:`cli_map` – maps a JSON/TOML/YAML payload onto an importable class.
* :func:`cli_example` – runs one of the bundled examples.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It invokes the composition root
(:class:`lib_object_mapper.core.Mapper`) and the payload adapters and never
reaches into the engine directly. ``lib_cli_exit_tools`` centralises the exit
code strategy so all commands behave consistently across shells and CI.
"""

from __future__ import annotations

import dataclasses
import json
import sys
from importlib import import_module, metadata
from pathlib import Path
from typing import Any, Callable, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.file_loaders.structured import loader_for
from .core import Mapper, load_settings
from .examples import EXAMPLES

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_object_mapper")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Object-object mapper",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_object_mapper",
    message="lib_object_mapper version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_object_mapper")
    except metadata.PackageNotFoundError:
        click.echo("lib_object_mapper (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_object_mapper')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("settings", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_settings() -> None:
    """Print the settings resolved from ``LIB_OBJECT_MAPPER_*`` variables as JSON."""

    click.echo(json.dumps(load_settings().as_dict(), indent=2, sort_keys=True))


@cli.command("map", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--source",
    "source",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="JSON, TOML or YAML file holding one record or a list of records",
)
@click.option(
    "--destination",
    required=True,
    help="Destination model as 'package.module:ClassName'",
)
@click.option(
    "--profile",
    default=None,
    help="Optional 'package.module:function' called with the mapper to register configurations",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_map(source: Path, destination: str, profile: Optional[str], indent: Optional[int]) -> None:
    """Map the records in SOURCE onto DESTINATION and print the result as JSON.

    Records are plain data, so they map by field name without any
    configuration. A ``--profile`` function may register configurations for
    ``dict -> DESTINATION`` to rename or compute fields.
    """

    model = _import_object(destination, "--destination")
    if not isinstance(model, type):
        raise click.BadParameter(f"{destination} is not a class", param_hint="--destination")
    mapper = Mapper.from_environment()
    if profile:
        _require_callable(_import_object(profile, "--profile"), profile)(mapper)
    payload = loader_for(str(source)).load(str(source))
    records = [dict(item) for item in payload] if isinstance(payload, list) else dict(payload)
    result = mapper.map(records, model)
    click.echo(json.dumps(_to_primitive(result), indent=indent, default=str))


@cli.command("example", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name", type=click.Choice(sorted(EXAMPLES), case_sensitive=False))
def cli_example(name: str) -> None:
    """Run a bundled example and print each result."""

    results = EXAMPLES[name.lower()]()
    for key, value in results.items():
        click.echo(f"{key}: {value!r}")


def _import_object(reference: str, param_hint: str) -> Any:
    """Resolve ``'package.module:attribute'`` to the referenced object."""

    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter("Use the form 'package.module:attribute'", param_hint=param_hint)
    try:
        target: Any = import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"Cannot import {reference}: {exc}", param_hint=param_hint) from exc
    return target


def _require_callable(candidate: Any, reference: str) -> Callable[[Mapper], Any]:
    if not callable(candidate):
        raise click.BadParameter(f"{reference} is not callable", param_hint="--profile")
    return candidate


def _to_primitive(value: Any) -> Any:
    """Convert mapped models into JSON-friendly structures."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: _to_primitive(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(key): _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {key: _to_primitive(item) for key, item in vars(value).items() if not key.startswith("_")}
    return value


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_object_mapper",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
