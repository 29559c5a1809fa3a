"""CLI interface for resolver-retry"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
import yaml

from resolver_retry.domain.config.retry import RetryConfig, build_retry_config
from resolver_retry.domain.declaration import directive_config_key, retry_declaration
from resolver_retry.domain.errors import ConfigurationError
from resolver_retry.infrastructure.backoff import backoff_schedule
from resolver_retry.infrastructure.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def parse_overrides(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    """Parse KEY=VALUE pairs, decoding values as YAML scalars

    Args:
        pairs: Raw --set values

    Returns:
        Dict of overrides

    Raises:
        click.BadParameter: If a pair has no '='
    """
    overrides: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--set")
        overrides[key.strip()] = yaml.safe_load(raw)
    return overrides


def _effective_config(ctx: click.Context, pairs: Tuple[str, ...]) -> RetryConfig:
    """Build the retry config from file/env settings plus --set overrides"""
    verbose = ctx.obj.get("verbose", False)
    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
        return build_retry_config(config_manager.get_retry_overrides(), parse_overrides(pairs))
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)


def _format_ms(value: float) -> str:
    if value == float("inf"):
        return "inf"
    return f"{value:g}ms"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .resolver-retry.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """resolver-retry - retry with backoff for field resolvers"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("name", required=False)
@click.pass_context
def declare(ctx, name: Optional[str]):
    """Print the schema declaration for the retry directive.

    NAME: Directive name (default: from config, "retry")
    """
    verbose = ctx.obj.get("verbose", False)
    if name is None:
        try:
            name = ConfigManager(config_path=ctx.obj.get("config_path")).get_directive_name()
        except ConfigurationError as e:
            _die(str(e), verbose=verbose, exc=e)
    click.echo(retry_declaration(name))
    logger.debug(f"Per-request config is read from context key {directive_config_key(name)}")


@cli.command()
@click.option("--set", "pairs", multiple=True, metavar="KEY=VALUE", help="Override a retry setting")
@click.pass_context
def config(ctx, pairs: Tuple[str, ...]):
    """Print the effective retry configuration as YAML."""
    retry_config = _effective_config(ctx, pairs)
    click.echo(yaml.safe_dump(retry_config.model_dump(by_alias=True), sort_keys=False).rstrip())


@cli.command()
@click.option("--set", "pairs", multiple=True, metavar="KEY=VALUE", help="Override a retry setting")
@click.pass_context
def schedule(ctx, pairs: Tuple[str, ...]):
    """Print the delay before every retry."""
    retry_config = _effective_config(ctx, pairs)
    delays = backoff_schedule(retry_config)
    click.echo(f"Attempts: {retry_config.max_attempts}")
    if not delays:
        click.echo("No retries configured")
        return
    total = 0.0
    for attempt_number, delay in enumerate(delays, start=2):
        total += delay
        click.echo(f"  attempt {attempt_number}: wait {_format_ms(delay)}")
    click.echo(f"Total wait: {_format_ms(total)}")
    if retry_config.randomize:
        click.echo("(randomize is on: each wait may be up to 2x longer, capped at maxTimeout)")


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
