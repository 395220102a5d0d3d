"""Command-line interface for ECS pre-destroy.

Drains the ECS cluster of a CloudFormation stack and then runs
``cdk destroy --all --force`` against the CDK app.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from .aws import AwsContext
from .config import load_config
from .exceptions import ConfigurationError, DestroyCommandError, PreDestroyError
from .pipeline import run_predestroy

app = typer.Typer(
    name="predestroy",
    help="Drain ECS services and tasks of a stack, then run cdk destroy",
    rich_markup_mode="rich",
    add_completion=False,
)
console = Console(stderr=True)
logger = logging.getLogger("predestroy")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    stack: str | None = typer.Option(None, "--stack", help="CloudFormation stack name (required)"),
    profile: str | None = typer.Option(None, "--profile", help="AWS profile for API calls and cdk"),
    region: str | None = typer.Option(None, "--region", help="AWS region override"),
    cdk_app_root: str | None = typer.Option(
        None, "--cdk-app-root", "--cdk-app-dir", help="Root directory of the CDK app [default: .]"
    ),
    cdk_app_file: str | None = typer.Option(
        None, "--cdk-app-file", help="CDK entry file name inside the app root (e.g. app.ts)"
    ),
    cdk_app_path: str | None = typer.Option(None, "--cdk-app-path", help="Full path of the CDK entry file"),
    cdk_executable: str | None = typer.Option(None, "--cdk-executable", help="CDK CLI program [default: cdk]"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only log mutating calls"),
    no_dry_run: bool = typer.Option(False, "--no-dry-run", help="Override dry_run from --config"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level [default: INFO]"),
    config_path: Path | None = typer.Option(None, "--config", help="YAML file with default settings"),
) -> None:
    """Tear down ECS workloads of a stack before destroying it with CDK."""
    try:
        if dry_run and no_dry_run:
            raise ConfigurationError(
                "--dry-run and --no-dry-run are mutually exclusive", config_key="dry_run"
            )
        config = load_config(
            config_path,
            stack=stack,
            profile=profile,
            region=region,
            cdk_app_root=cdk_app_root,
            cdk_app_file=cdk_app_file,
            cdk_app_path=cdk_app_path,
            cdk_executable=cdk_executable,
            dry_run=True if dry_run else (False if no_dry_run else None),
            log_level=log_level,
        )
    except PreDestroyError as e:
        configure_logging()
        logger.error("Error: %s", e)
        console.print(f"[bold red]❌ Invalid configuration: {e}[/bold red]")
        raise typer.Exit(code=1)

    configure_logging(config.log_level)
    if config.dry_run:
        console.print("[bold yellow]🔎 Dry run: no resources will be changed[/bold yellow]")

    try:
        aws = AwsContext.create(config.profile, config.region)
        run_predestroy(config, aws)
    except DestroyCommandError as e:
        logger.error("failed to run cdk destroy: %s", e)
        console.print(f"[bold red]❌ Destroy failed: {e}[/bold red]")
        raise typer.Exit(code=e.exit_code)
    except PreDestroyError as e:
        logger.error("%s", e)
        console.print(f"[bold red]❌ Pre-destroy failed: {e}[/bold red]")
        raise typer.Exit(code=1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[bold red]💥 Unexpected error: {e}[/bold red]")
        raise typer.Exit(code=1)

    if config.dry_run:
        console.print("[bold green]✅ Dry run completed[/bold green]")
    else:
        console.print(f"[bold green]✅ Stack {config.stack} destroyed[/bold green]")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
