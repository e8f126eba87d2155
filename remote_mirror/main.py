from __future__ import annotations

from collections.abc import Callable
import functools
from pathlib import Path
import sys
import traceback

import click
from loguru import logger

from .config import MirrorConfig
from .logger import setup_logger
from .remote import RemoteGitMirror
from .typed_path import AbsFile, Remote
from .types import ExitCode


def check_for_errors[**P](fn: Callable[P, ExitCode | None]) -> Callable[P, None]:
    @functools.wraps(fn)
    def main(*args: P.args, **kwargs: P.kwargs) -> None:
        try:
            exitcode = fn(*args, **kwargs)
        except BaseException as e:
            logger.debug(f"Threw {type(e)}!")
            logger.trace(traceback.format_exc())
            logger.error(f"{type(e).__name__}: {e}")
            sys.exit(1)
        if exitcode is not None:
            sys.exit(exitcode)

    return main


@click.group(context_settings=dict(show_default=True))
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Display more output (repeat up to 2 times).",
    show_default=False,
)
@click.option(
    "-q",
    "--quiet",
    count=True,
    help="Display less output (repeat up to 3 times).",
    show_default=False,
)
@click.option(
    "--config",
    "-c",
    "config_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML file with mirror settings.",
)
@click.pass_context
@check_for_errors
def main(ctx: click.Context, quiet: int, verbose: int, config_file: Path | None) -> None:
    setup_logger(quiet, verbose)
    ctx.obj = (
        MirrorConfig() if config_file is None else MirrorConfig.load(AbsFile(config_file.absolute()))
    )


@main.command()
@click.argument("name")
@click.argument("url")
@click.pass_obj
@check_for_errors
def clone(config: MirrorConfig, name: str, url: str) -> None:
    """Mirror URL into the cache as NAME, unless it is already there.

    \b
    Example:
    remote-mirror clone lib https://example.com/lib.git
    """
    RemoteGitMirror.open(name, Remote(url), config=config)


@main.command()
@click.argument("name")
@click.argument("url")
@click.option("--branch", "-b", default=None, help="Branch or ref to fetch. [default: from config]")
@click.option("--dry-run", is_flag=True, help="Do not fetch anything.")
@click.option("--ignore-fetch", is_flag=True, help="Use the cached refs as they are.")
@click.pass_obj
@check_for_errors
def fetch(
    config: MirrorConfig,
    name: str,
    url: str,
    branch: str | None,
    dry_run: bool,
    ignore_fetch: bool,
) -> None:
    """Update BRANCH of the NAME mirror from its origin, cloning it first if needed.

    \b
    Example:
    remote-mirror fetch lib https://example.com/lib.git --branch main
    """
    config = config.replace(
        dry_run=config.dry_run or dry_run, ignore_fetch=config.ignore_fetch or ignore_fetch
    )
    mirror = RemoteGitMirror.open(name, Remote(url), config=config)
    mirror.fetch(branch)
    if not config.skip_fetch:
        click.echo(mirror.commit(branch))


@main.command()
@click.argument("name")
@click.argument("url")
@click.pass_obj
@check_for_errors
def dispose(config: MirrorConfig, name: str, url: str) -> None:
    """Remove the NAME mirror from the cache.

    \b
    Example:
    remote-mirror dispose lib https://example.com/lib.git
    """
    RemoteGitMirror(name, Remote(url), config).dispose()


@main.command()
@click.argument("name")
@click.pass_obj
@check_for_errors
def path(config: MirrorConfig, name: str) -> None:
    """Print where the NAME mirror lives."""
    click.echo(config.mirror_path(name).path)
