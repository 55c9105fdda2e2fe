"""
upckeys CLI
============

Click-based command-line interface for the upckeys passphrase recovery
tool.

Usage::

    upc-keys UPC1234567 SAAP,SAPP,SBAP
    upc-keys -p -5 UPC1234567 SAAP
    python -m upckeys --format table UPC1234567 SAAP

Exit status is 1 for any usage error (bad ESSID, wrong argument count,
unknown flag) and 0 otherwise, including when nothing matched.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
from typing import Any, Optional, Sequence

import click
from click.utils import PacifyFlushWrapper

from shared.config import UpcConfig
from shared.console import UpcConsole

from upckeys.core.engine import KeyRecoveryEngine
from upckeys.core.models import FrequencyBand, TargetEssid
from upckeys.output.console import OUTPUT_FORMATS, ResultSink
from upckeys.parsers.essid_parser import EssidFormatError, parse_essid, split_prefixes

_BAND_META_KEY = "upckeys.band"

_BAND_FLAGS = {"2": FrequencyBand.BAND_24, "5": FrequencyBand.BAND_5}


def _last_band_flag(
    args: Sequence[str], value_options: set[str]
) -> Optional[FrequencyBand]:
    """Return the band named by the last ``-2``/``-5`` in *args*.

    Short-option clusters (``-p52``) are read left to right.  Tokens
    consumed as option values (``-n 5``, ``-w5``) are skipped, and
    scanning stops at ``--``.
    """
    band: Optional[FrequencyBand] = None
    tokens = iter(args)
    for token in tokens:
        if token == "--":
            break
        if token.startswith("--"):
            if "=" not in token and token in value_options:
                next(tokens, None)
            continue
        if len(token) < 2 or not token.startswith("-"):
            continue
        for pos, char in enumerate(token[1:], start=1):
            if char in _BAND_FLAGS:
                band = _BAND_FLAGS[char]
            elif f"-{char}" in value_options:
                # Value is the rest of the token, or the next one.
                if pos == len(token) - 1:
                    next(tokens, None)
                break
    return band


# ===================================================================== #
#  Command class
# ===================================================================== #

class _UpcCommand(click.Command):
    """Command that reports usage errors with exit status 1.

    ``-2`` and ``-5`` may be repeated; the last occurrence selects the
    band, which is stored in ``ctx.meta`` before the regular parse.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        value_options = {
            opt
            for param in self.get_params(ctx)
            if isinstance(param, click.Option) and not param.is_flag
            for opt in param.opts
        }
        band = _last_band_flag(args, value_options)
        if band is not None:
            ctx.meta[_BAND_META_KEY] = band
        return super().parse_args(ctx, args)

    def main(self, *args: Any, **kwargs: Any) -> Any:
        kwargs["standalone_mode"] = False
        try:
            return super().main(*args, **kwargs)
        except click.ClickException as exc:
            exc.show()
            sys.exit(1)
        except click.exceptions.Abort:
            click.echo("Aborted!", err=True)
            sys.exit(1)
        except BrokenPipeError:
            # Reader went away (``| head``); silence the final flush.
            sys.stdout = PacifyFlushWrapper(sys.stdout)
            sys.stderr = PacifyFlushWrapper(sys.stderr)
            sys.exit(1)


# ===================================================================== #
#  Parameter callbacks
# ===================================================================== #

def _essid_argument(
    ctx: click.Context, param: click.Parameter, value: str
) -> TargetEssid:
    try:
        return parse_essid(value)
    except EssidFormatError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


# ===================================================================== #
#  Command
# ===================================================================== #

@click.command(
    cls=_UpcCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "-p", "passwords_only",
    is_flag=True,
    default=False,
    help="Print passwords only, not serial numbers nor frequencies.",
)
@click.option(
    "-2", "band_24",
    is_flag=True,
    expose_value=False,
    help="Print only candidates on 2.4 GHz.",
)
@click.option(
    "-5", "band_5",
    is_flag=True,
    expose_value=False,
    help="Print only candidates on 5 GHz.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: csv, or [output] format from the config).",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a TOML configuration file.",
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Threads used to scan the serial space.",
)
@click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many candidates.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log search progress to stderr.",
)
@click.argument("essid", callback=_essid_argument)
@click.argument("prefixes")
@click.pass_context
def cli(
    ctx: click.Context,
    passwords_only: bool,
    output_format: Optional[str],
    config_path: Optional[str],
    workers: Optional[int],
    limit: Optional[int],
    verbose: bool,
    essid: TargetEssid,
    prefixes: str,
) -> None:
    """WPA2 passphrase recovery for UPCxxxxxxx devices.

    ESSID should be in 'UPCxxxxxxx' format (7 digits).  PREFIXES should
    be a string of comma separated serial number prefixes.
    """
    config = UpcConfig.load(config_path)
    if verbose:
        config.global_settings.log_level = "DEBUG"
    if workers is not None:
        config.search.workers = workers

    output_format = output_format or config.output.format
    if output_format not in OUTPUT_FORMATS:
        raise click.UsageError(
            f"Unknown output format {output_format!r} in configuration", ctx=ctx
        )

    band: Optional[FrequencyBand] = ctx.meta.get(_BAND_META_KEY)
    prefix_list = split_prefixes(prefixes, config.search.prefix_delimiter)

    console = UpcConsole()
    engine = KeyRecoveryEngine(config)
    if not prefix_list:
        console.warning("No serial prefixes given; nothing to print")

    sink = ResultSink(
        console,
        passwords_only=passwords_only or config.output.passwords_only,
    )

    if output_format == "csv":
        sink.stream(engine.candidates(essid, prefix_list, band=band, limit=limit))
        return

    with console.status(f"Scanning {engine.enumerator.space_size:,} serial tuples..."):
        report = engine.recover(essid, prefix_list, band=band, limit=limit)
    if output_format == "table":
        sink.display_table(report)
    else:
        sink.display_json(report)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the upckeys CLI."""
    cli(prog_name="upc-keys")


if __name__ == "__main__":
    main()
