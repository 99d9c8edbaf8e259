"""Click CLI wiring and entry points for framemaker."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console

from src.framemaker.cli_runtime import CLIAppError, RunRequest, run_cli
from src.framemaker.frames.registry import default_registry
from src.framemaker.reporting import render_frame_table

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_EPILOG = """\b
Examples:
  framemaker screenshot.png
  framemaker "screenshots/*.png" ./output
  framemaker iphone-shot.png --frame=iphone
  framemaker ipad-shot.png --frame=ipad

\b
Notes:
  - Screenshots are automatically resized to fill the frame's screen
  - Output files are named <original>-framed.png
"""


@click.command(context_settings=CONTEXT_SETTINGS, epilog=_EPILOG)
@click.argument("input_pattern", metavar="INPUT", required=False)
@click.argument("output_dir", metavar="[OUTPUT_DIR]", required=False)
@click.option(
    "--frame",
    "frame_name",
    default=None,
    help="Frame type: iphone, ipad (default: iphone, or [runner].default_frame).",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to framemaker.toml. Defaults to FRAMEMAKER_CONFIG or ./framemaker.toml.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Number of screenshots framed in parallel (default: 1).",
)
@click.option("--quiet", is_flag=True, help="Only report errors.")
@click.option("--verbose", is_flag=True, help="Show per-step diagnostic output.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
@click.option("--list-frames", is_flag=True, help="List the available device frames and exit.")
@click.pass_context
def main(
    ctx: click.Context,
    input_pattern: Optional[str],
    output_dir: Optional[str],
    *,
    frame_name: Optional[str],
    config_path: Optional[str],
    workers: Optional[int],
    quiet: bool,
    verbose: bool,
    no_color: bool,
    list_frames: bool,
) -> None:
    """Add device frames to app screenshots.

    INPUT is a screenshot file or glob pattern (e.g. "screenshots/*.png").
    OUTPUT_DIR defaults to ./framed.
    """

    if list_frames:
        Console(no_color=no_color).print(render_frame_table(default_registry()))
        return
    if input_pattern is None:
        click.echo(ctx.get_help())
        return

    request = RunRequest(
        input_pattern=input_pattern,
        output_dir=output_dir,
        frame_name=frame_name,
        config_path=config_path,
        workers=workers,
        quiet=quiet,
        verbose=verbose,
        no_color=no_color,
    )
    try:
        run_cli(request)
    except CLIAppError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(exc.code) from exc
    except Exception:  # noqa: BLE001
        Console(stderr=True).print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
