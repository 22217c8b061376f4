"""Click CLI for harvest-blame.

Commands:
    run          -- Fetch timesheets, render the report and email it.
    check-config -- Validate the configuration and print a summary.
    pipeline     -- Invoke the pypyr ``blame`` pipeline.
"""

from __future__ import annotations

import logging
import pathlib

import click
from dotenv import load_dotenv

from harvest_blame.errors import BlameError

logger = logging.getLogger("harvest_blame.cli")

LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(verbose: bool) -> None:
    """Send timestamped progress lines to the console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def _load_config_or_exit():
    """Return the validated config, or print the problem and exit 1."""
    from harvest_blame.config import load_config

    try:
        return load_config()
    except BlameError as exc:
        click.echo(click.style(f"Configuration error: {exc}", fg="red"))
        raise SystemExit(1)


@click.group()
@click.option(
    "--env-file",
    default=None,
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help="Path to a .env file (defaults to searching for .env).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.pass_context
def main(ctx: click.Context, env_file: pathlib.Path | None, verbose: bool) -> None:
    """harvest-blame: Email a colour-coded summary of logged Harvest hours."""
    load_dotenv(dotenv_path=env_file)
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Render the report without sending the email.",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(dir_okay=False, writable=True, path_type=pathlib.Path),
    help="Also write the rendered HTML report to this file.",
)
def run(dry_run: bool, output: pathlib.Path | None) -> None:
    """Fetch timesheets, render the hours report and email it."""
    from harvest_blame.blame import run_blame
    from harvest_blame.harvest.client import HarvestClient

    config = _load_config_or_exit()

    click.echo(
        click.style(
            f"Blaming {len(config.user_ids)} users for "
            f"{config.date_range.start} to {config.date_range.end}...",
            fg="cyan",
        )
    )

    try:
        with HarvestClient.from_settings(config.harvest) as client:
            report = run_blame(config, client, dry_run=dry_run)
    except BlameError as exc:
        logger.error("%s", exc)
        click.echo(click.style(f"Error: {exc}", fg="red"))
        raise SystemExit(1)

    if output is not None:
        output.write_text(report["html_body"], encoding="utf-8")
        click.echo(f"Report written to {output}.")

    click.echo(
        f"Report: {report['row_count']} of {len(config.user_ids)} users "
        "with timesheets."
    )

    if dry_run:
        click.echo(click.style("Dry run: email not sent.", fg="yellow"))
    elif report["email_sent"]:
        click.echo(
            click.style(f"Report sent to {config.email.to_address}.", fg="green")
        )
    else:
        click.echo(
            click.style("Failed to send email. Check SMTP settings.", fg="red")
        )


@main.command("check-config")
def check_config() -> None:
    """Validate the configuration and print a summary."""
    config = _load_config_or_exit()

    click.echo(click.style("Configuration OK.", fg="green"))
    click.echo(f"  Harvest account : {config.harvest.base_url}")
    click.echo(
        f"  Date range      : {config.date_range.start} to "
        f"{config.date_range.end} ({len(config.date_range)} days)"
    )
    click.echo(f"  Users           : {', '.join(config.user_ids)}")
    click.echo(f"  Email to        : {config.email.to_address}")
    click.echo(f"  CC              : {', '.join(config.email.cc) or '(none)'}")
    click.echo(f"  CC users        : {'yes' if config.email.cc_users else 'no'}")


@main.command()
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Render the report without sending the email.",
)
def pipeline(dry_run: bool) -> None:
    """Run the pypyr blame pipeline."""
    from pypyr import pipelinerunner
    from harvest_blame import PACKAGE_DIR

    pipeline_name = "blame"
    click.echo(
        click.style(f"Running pipeline: {pipeline_name}", fg="cyan")
    )

    try:
        pipelinerunner.run(
            pipeline_name=str(PACKAGE_DIR / "pipelines" / pipeline_name),
            dict_in={"dry_run": dry_run},
            py_dir=str(PACKAGE_DIR),
        )
        click.echo(
            click.style(f"Pipeline '{pipeline_name}' completed.", fg="green")
        )
    except Exception as exc:
        logger.error("Pipeline failed: %s", exc)
        click.echo(
            click.style(f"Pipeline failed: {exc}", fg="red")
        )
        raise SystemExit(1)
