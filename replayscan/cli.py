"""CLI interface for replayscan."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from replayscan.config import Config
from replayscan.decoder import RrrocketRunner
from replayscan.engine import BatchProcessor
from replayscan.errors import DecoderNotFoundError, ScanError
from replayscan.scanner import scan_directory
from replayscan.session import RichPresenter, SessionController, TerminalKeys
from replayscan.summary import format_summary, process_all

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class AliasedGroup(click.Group):
    """Group that also resolves hidden command aliases."""

    aliases = {"demos": "list"}

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))


@click.group(cls=AliasedGroup)
@click.version_option(package_name="replayscan")
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="REPLAYSCAN_DIRECTORY",
    help="Directory to read the replay files from",
)
@click.option("--decoder", help="Path to the rrrocket executable")
@click.option(
    "--header-only",
    is_flag=True,
    help="Decode replay headers only; faster, but damaged frame data goes unnoticed",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Logging verbosity",
)
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Write logs here")
@click.pass_context
def cli(
    ctx: click.Context,
    directory: Path | None,
    decoder: str | None,
    header_only: bool,
    log_level: str,
    log_file: Path | None,
) -> None:
    """Browse and summarize Rocket League replays."""
    _configure_logging(log_level, log_file)

    config = Config()
    if directory is not None:
        config.replay_directory = directory
    if decoder is not None:
        config.decoder.command = decoder
    if header_only:
        config.decoder.network_parse = False

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _configure_logging(level: str, log_file: Path | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        filename=str(log_file) if log_file else None,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> NoReturn:
    click.echo(click.style(message, fg="red", bold=True), err=True)
    sys.exit(1)


def _build_processor(config: Config) -> BatchProcessor:
    decoder = RrrocketRunner(
        command=config.decoder.command,
        network_parse=config.decoder.network_parse,
        timeout_seconds=config.decoder.timeout_seconds,
    )
    return BatchProcessor(decoder)


@cli.command("list", short_help="List the replays (alias: demos)")
@click.option("--summary", "-s", is_flag=True, help="Print a summary instead of the browser")
@click.option("--verbose", "-v", is_flag=True, help="Show additional information about each replay")
@click.option(
    "--markdown",
    "--md",
    "-m",
    is_flag=True,
    help="Output the summary in markdown, in alphabetical order",
)
@click.pass_context
def list_replays(ctx: click.Context, summary: bool, verbose: bool, markdown: bool) -> None:
    """List the replays in the replay directory. Also available as ``demos``.

    Opens an interactive browser that parses replays in the background of the
    UI. --summary, --verbose and --markdown print a plain listing instead.
    """
    config: Config = ctx.obj["config"]
    directory = config.replay_directory

    try:
        processor = _build_processor(config)
    except DecoderNotFoundError as e:
        _fail(f"Error: {e}")

    if summary or verbose or markdown:
        _print_summary(config, processor, verbose, markdown)
        return

    controller = SessionController(
        directory,
        processor,
        extensions=config.scanner.extensions,
        poll_timeout=config.session.poll_timeout,
    )

    try:
        if config.session.autostart:
            controller.start_scan()
        else:
            scan_directory(directory, config.scanner.extensions)
    except ScanError as e:
        _fail(f"Error: {e}")

    try:
        with TerminalKeys() as keys, RichPresenter() as presenter:
            controller.run(presenter, keys)
    except KeyboardInterrupt:
        sys.exit(130)


def _print_summary(
    config: Config,
    processor: BatchProcessor,
    verbose: bool,
    markdown: bool,
) -> None:
    try:
        handles = scan_directory(config.replay_directory, config.scanner.extensions)
    except ScanError as e:
        _fail(f"Error: {e}")

    try:
        entries = process_all(handles, processor)
    except KeyboardInterrupt:
        sys.exit(130)

    click.echo()
    for line in format_summary(entries, verbose=verbose, markdown=markdown):
        click.echo(line)


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
