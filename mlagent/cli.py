"""ML Agent CLI — drive and inspect the on-device ML artifact registry."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mlagent import __version__
from mlagent.config import load_config

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Be verbose")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML config file")
@click.option("--registry", "-p", "registry_path", default=None, help="Path to the registry directory")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None, registry_path: str | None):
    """ML Agent — keeps the ML artifact registry in sync with resource packages.

    Models, pipelines and resources described by JSON descriptors inside
    installed resource packages are registered on install.
    """
    config = load_config(config_path)
    if registry_path:
        config.registry_path = registry_path
    config.verbose = config.verbose or verbose

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.obj = config


def _registry(config):
    from mlagent.registry.local_registry import LocalRegistry

    return LocalRegistry(config.registry_path)


# ── Events ───────────────────────────────────────────────────────────


@main.command()
@click.argument("package_id")
@click.option("--res-type", required=True, help="Resource type of the package")
@click.option("--res-version", required=True, help="Resource version of the package")
@click.option("--apps-root", default=None, help="Override the installed apps root")
@click.pass_obj
def install(config, package_id: str, res_type: str, res_version: str, apps_root: str | None):
    """Register the artifacts of an installed resource package.

    Behaves as if the package manager reported PACKAGE_ID as installed.
    """
    from mlagent.events.models import EventKind, EventPhase, LifecycleEvent
    from mlagent.packages.info import StaticPackageInfoProvider
    from mlagent.sync.router import EventRouter

    if apps_root:
        config.apps_root = apps_root

    provider = StaticPackageInfoProvider()
    provider.add(package_id, res_type, res_version)

    console.print(f"\n[bold blue]ML Agent[/] — Installing: {package_id}\n")

    with EventRouter(_registry(config), provider, config) as router:
        report = router.process(
            LifecycleEvent(
                package_category=config.package_category,
                package_id=package_id,
                kind=EventKind.INSTALL,
                phase=EventPhase.COMPLETED,
                progress=100,
            )
        )

    _print_report(report)


@main.command()
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def replay(config, events_file: str):
    """Feed a JSON-lines file of package events through the agent.

    Package metadata is read from each package's package.yaml manifest.
    """
    from mlagent.events.source import JsonLinesEventSource
    from mlagent.packages.info import ManifestPackageInfoProvider
    from mlagent.sync.router import EventRouter

    source = JsonLinesEventSource(events_file)
    provider = ManifestPackageInfoProvider(config.apps_root)

    with EventRouter(_registry(config), provider, config, source=source):
        count = source.run()

    console.print(f"\n[green]Replayed {count} event(s)[/] from {events_file}")


def _print_report(report):
    if report is None:
        return
    if report.aborted:
        console.print(f"[red]Aborted:[/] {report.error}")
        return

    for outcome in report.outcomes:
        status = "[green]OK[/]" if outcome.ok else "[red]FAIL[/]"
        suffix = f" v{outcome.version}" if outcome.version else ""
        console.print(f"  {status} {outcome.kind.value} {outcome.name}{suffix}")
        if outcome.error:
            console.print(f"       [red]{outcome.error}[/]")

    for skipped in report.skipped_records:
        console.print(f"  [yellow]![/] {skipped}")

    console.print(f"\n{report.summary()}")


# ── Registry ─────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
@click.pass_obj
def models(config, name: str | None):
    """List registered models, optionally only the versions of NAME."""
    reg = _registry(config)
    entries = reg.get_models(name) if name else reg.list_models()

    if not entries:
        console.print("[yellow]No models registered.[/]")
        return

    table = Table(title=f"Models ({len(entries)} versions)")
    table.add_column("Name", style="cyan")
    table.add_column("Version", justify="right")
    table.add_column("Active", justify="center")
    table.add_column("Path")
    table.add_column("Description")

    for entry in entries:
        active = "[green]Y[/]" if entry.active else ""
        table.add_row(entry.name, str(entry.version), active, entry.path, entry.description[:50])

    console.print(table)


@main.command()
@click.pass_obj
def pipelines(config):
    """List registered pipelines."""
    entries = _registry(config).list_pipelines()

    if not entries:
        console.print("[yellow]No pipelines registered.[/]")
        return

    table = Table(title=f"Pipelines ({len(entries)})")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for entry in entries:
        table.add_row(entry.name, entry.description[:80])

    console.print(table)


@main.command()
@click.pass_obj
def resources(config):
    """List registered resources."""
    entries = _registry(config).list_resources()

    if not entries:
        console.print("[yellow]No resources registered.[/]")
        return

    table = Table(title=f"Resources ({len(entries)})")
    table.add_column("Name", style="cyan")
    table.add_column("Path")
    table.add_column("Description")
    for entry in entries:
        table.add_row(entry.name, entry.path, entry.description[:50])

    console.print(table)


@main.command()
@click.argument("name")
@click.argument("version", type=int)
@click.pass_obj
def activate(config, name: str, version: int):
    """Make VERSION the active version of model NAME."""
    from mlagent.registry.local_registry import RegistryError

    try:
        _registry(config).activate_model(name, version)
    except RegistryError as e:
        raise click.ClickException(str(e))
    console.print(f"  Activated: {name}@{version}")


@main.command(name="delete-model")
@click.argument("name")
@click.option("--version", "model_version", type=int, default=None,
              help="Delete only this version (default: all versions)")
@click.pass_obj
def delete_model(config, name: str, model_version: int | None):
    """Delete model NAME from the registry."""
    from mlagent.registry.local_registry import RegistryError

    reg = _registry(config)
    try:
        if model_version is None:
            reg.delete_all_model_versions(name)
        else:
            reg.delete_model(name, model_version)
    except RegistryError as e:
        raise click.ClickException(str(e))

    target = name if model_version is None else f"{name}@{model_version}"
    console.print(f"  Deleted: {target}")


if __name__ == "__main__":
    main()
