#!/usr/bin/env python3
"""
Command Line Interface for the config drive provider.
Provides manual inspection and debugging capabilities.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict

import click

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from ..core.logger import get_logger, setup_logging
from ..main import build_mounter, build_scanner
from ..provider.config_drive import ConfigDriveProvider

# Logging
logger = get_logger(__name__)

def _load_config(ctx: click.Context):
    try:
        return ConfigLoader.load(ctx.obj["config_path"])
    except ValueError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

def _build_provider(ctx: click.Context, device: str, fstype: str | None) -> ConfigDriveProvider:
    config = _load_config(ctx)
    return ConfigDriveProvider(
        device,
        fstype=fstype or config.default_fstype,
        mounter=build_mounter(config),
    )

# CLI root
@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_PATH,
              show_default=True, help="Path to options file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str):
    """Config drive CLI - inspection and debugging tools"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    setup_logging(log_level="DEBUG" if verbose else "ERROR", log_file=None)

    if verbose:
        logger.debug("Verbose logging enabled")

# Config commands
@cli.group()
def config():
    """Configuration commands"""
    pass

@config.command(name="show")
@click.pass_context
def config_show(ctx: click.Context):
    """Show current configuration"""
    config = _load_config(ctx)
    click.echo(json.dumps(asdict(config), indent=2))

@config.command(name="validate")
@click.pass_context
def config_validate(ctx: click.Context):
    """Validate configuration"""
    _load_config(ctx)
    click.echo("Configuration is valid")

# Drive commands
@cli.group()
def drives():
    """Config drive commands"""
    pass

@drives.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def drives_list(ctx: click.Context, as_json: bool):
    """List config drives"""
    config = _load_config(ctx)
    candidates = build_scanner(config).scan_config_drives()

    if as_json:
        click.echo(json.dumps([asdict(c) for c in candidates], indent=2))
        return

    if not candidates:
        click.echo("No config drives found")
        return

    click.echo(f"Found {len(candidates)} config drive(s):\n")
    for i, candidate in enumerate(candidates, 1):
        click.echo(f"{i}. {candidate.device} ({candidate.fstype}, label '{candidate.label}')")

@drives.command(name="probe")
@click.argument("device")
@click.option("--fstype", "-t", type=click.Choice(ConfigLoader.SUPPORTED_FSTYPES),
              default=None, help="Filesystem type to mount with")
@click.pass_context
def drives_probe(ctx: click.Context, device: str, fstype: str | None):
    """Check whether a device carries user-data"""
    provider = _build_provider(ctx, device, fstype)
    _, err = provider.extract()

    if provider.probe():
        click.echo(f"{provider.describe()}: user-data found ({len(provider.userdata)} bytes)")
        return

    click.echo(f"{provider.describe()}: no user-data: {err}", err=True)
    sys.exit(1)

@drives.command(name="extract")
@click.argument("device")
@click.option("--fstype", "-t", type=click.Choice(ConfigLoader.SUPPORTED_FSTYPES),
              default=None, help="Filesystem type to mount with")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True),
              default=None, help="Write to file instead of stdout")
@click.option("--metadata", "-m", is_flag=True, help="Extract meta_data.json instead of user-data")
@click.pass_context
def drives_extract(ctx: click.Context, device: str, fstype: str | None,
                   output: str | None, metadata: bool):
    """Extract user-data (or metadata) from a device"""
    provider = _build_provider(ctx, device, fstype)
    userdata, err = provider.extract()

    if metadata:
        payload = provider.metadata
        if not payload:
            click.echo(f"{provider.describe()}: no metadata found", err=True)
            sys.exit(1)
    else:
        if err is not None:
            click.echo(f"{provider.describe()}: {err}", err=True)
            sys.exit(1)
        payload = userdata

    if output:
        with open(output, "wb") as f:
            f.write(payload)
        click.echo(f"Wrote {len(payload)} bytes to {output}")
    else:
        click.get_binary_stream("stdout").write(payload)

if __name__ == "__main__":
    cli()
