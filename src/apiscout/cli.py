from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Optional

import json
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from apiscout.config import Config
from apiscout.extractors.profiles import list_profiles
from apiscout.orchestrator.pipeline import run_discovery
from apiscout.repo.ignore import VENDOR_DIRS
from apiscout.repo.materializer import RemoteCredentials, is_remote_locator
from apiscout.utils.exceptions import DiscoveryError


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()
err_console = Console(stderr=True)


@app.command()
def discover(
    locator: str = typer.Argument(..., help="Local directory or http(s) repository URL"),
    framework: str = typer.Option(
        Config.DEFAULT_FRAMEWORK, "--framework", "-f", help="Framework profile, or 'auto' to detect"
    ),
    object_instance: str = typer.Option(
        Config.DEFAULT_OBJECT_INSTANCE, "--object", "-o", help="Router/client identifier to match (router, app, api, ...)"
    ),
    token: Optional[str] = typer.Option(
        Config.GITHUB_TOKEN, "--token", help="Access token for private remote repositories", show_default=False
    ),
    skip_vendor: bool = typer.Option(True, help="Skip node_modules, dist, build and similar directories"),
    format: str = typer.Option("table", help="Output format: table|json"),
    out: Optional[str] = typer.Option(None, help="Write output to this path instead of stdout"),
    limit: int = typer.Option(200, help="Max rows to print in table format"),
) -> None:
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    if not is_remote_locator(locator):
        repo_path = Path(locator).expanduser().resolve()
        if not repo_path.exists():
            raise typer.BadParameter(f"Repo path does not exist: {repo_path}")
        if not repo_path.is_dir():
            raise typer.BadParameter(f"Repo path is not a directory: {repo_path}")
        locator = str(repo_path)

    credentials = RemoteCredentials(token=token) if token else None
    try:
        result = run_discovery(
            locator,
            framework,
            object_instance,
            credentials,
            ignore_dirs=VENDOR_DIRS if skip_vendor else (),
        )
    except DiscoveryError as e:
        err_console.print(f"[bold red]error:[/bold red] {e}")
        raise typer.Exit(code=1)

    endpoints = result.endpoints

    if fmt == "json":
        payload = [e.model_dump(by_alias=True) for e in endpoints]
        text = json.dumps(payload, indent=2, default=str)
        if out:
            _write(out, text)
        else:
            typer.echo(text)
        return

    if out:
        lines = [f"{e.method}\t{e.path}\t{e.source_file}:{e.line or ''}" for e in endpoints]
        _write(out, "\n".join(lines))
        return

    console.print(f"[bold green]apiscout[/bold green] discover: {result.locator}")
    console.print(f"Framework: [bold]{result.framework}[/bold] (confidence={result.confidence:.2f})")
    console.print(f"Object instance: [bold]{result.object_instance}[/bold]")
    console.print(f"Endpoints found: [bold]{len(endpoints)}[/bold]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("KIND", no_wrap=True)
    table.add_column("RESOURCE")
    table.add_column("FILE:LINE", no_wrap=True)

    for e in endpoints[:limit]:
        table.add_row(
            e.method,
            escape(e.path) if e.path else "[dim](dynamic)[/dim]",
            e.kind,
            e.resource_name,
            escape(f"{e.source_file}:{e.line if e.line is not None else '?'}"),
        )
    console.print(table)
    if len(endpoints) > limit:
        console.print(f"  … and {len(endpoints) - limit} more")

    by_resource = Counter(e.resource_name for e in endpoints)
    if by_resource:
        console.print("")
        console.print("[bold]Endpoints per resource:[/bold]")
        for name, cnt in by_resource.most_common(10):
            console.print(f"  {cnt:>4}  {name}")


@app.command()
def frameworks() -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("PROFILE", no_wrap=True)
    table.add_column("KIND", no_wrap=True)
    table.add_column("VERBS")
    table.add_column("DESCRIPTION")

    for profile in list_profiles():
        verbs = ", ".join(f"{name}->{method}" for name, method in profile.verbs.items())
        table.add_row(profile.name, profile.kind, verbs, profile.description)

    console.print(table)


def _write(out: str, text: str) -> None:
    out_path = Path(out).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    err_console.print(f"[bold green]Wrote[/bold green] {out_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
