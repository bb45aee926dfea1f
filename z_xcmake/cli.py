"""CLI entry point for standalone usage: z-xcmake.

Subcommands:
    z-xcmake translate xcodebuild.log -o Makefile --args "-scheme App"
    z-xcmake scan xcodebuild.log          # Classify a trace without writing rules
    z-xcmake inspect Makefile             # Show the header of a generated rule file
"""

from __future__ import annotations

import os
import sys

import click

from z_xcmake.core.logging import setup_logging
from z_xcmake.emitter import format_timestamp, read_header
from z_xcmake.exceptions import TraceOpenError, XcmakeError
from z_xcmake.report import TranslationReport
from z_xcmake.translator import TraceTranslator

# Defaults (overridable via env vars)
_DEFAULT_MAKEFILE = os.environ.get("XCMAKE_MAKEFILE", "Makefile")
_DEFAULT_TIMING_WRAPPER = os.environ.get("XCMAKE_TIMING_WRAPPER", "time")


def _print_summary(report: TranslationReport) -> None:
    summary = report.get_summary()
    click.echo(f"  Rules: {summary['rules']}")
    click.echo(f"  Linked: {' '.join(summary['linked']) or '-'}")
    click.echo(f"  Signing commands: {summary['signing_commands']}")
    for kind, count in summary["records"].items():
        click.echo(f"  {kind}: {count}")
    if summary["skipped"]:
        click.echo(f"\nSkipped records ({len(summary['skipped'])}):")
        for s in summary["skipped"]:
            click.echo(f"  [!] line {s['line']} {s['kind']}: {s['reason']}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """z-xcmake: turn an xcodebuild trace into a Makefile."""
    setup_logging(verbose)


@main.command("translate")
@click.argument("trace", type=click.Path(dir_okay=False))
@click.option("-o", "--output", default=_DEFAULT_MAKEFILE, help="Rule file to (re)write")
@click.option(
    "--args", "invocation", default="", help="Build tool arguments recorded in the header"
)
@click.option(
    "--timing-wrapper",
    default=_DEFAULT_TIMING_WRAPPER,
    help="Command prefixed to every recipe ('' disables)",
)
def translate(trace: str, output: str, invocation: str, timing_wrapper: str) -> None:
    """Translate a captured build trace into a Makefile."""
    translator = TraceTranslator(timing_wrapper=timing_wrapper)
    try:
        report = translator.translate_file(trace, output, invocation)
    except XcmakeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {output}:")
    _print_summary(report)


@main.command("scan")
@click.argument("trace", type=click.Path(dir_okay=False))
def scan(trace: str) -> None:
    """Classify a trace and report what a translation would produce."""
    translator = TraceTranslator()
    try:
        try:
            f = open(trace, errors="replace")
        except OSError as e:
            raise TraceOpenError(trace, e.strerror or str(e)) from e
        with f:
            _, report = translator.scan(f)
    except XcmakeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Scanned {trace}:")
    _print_summary(report)


@main.command("inspect")
@click.argument("makefile", type=click.Path(exists=True, dir_okay=False))
def inspect(makefile: str) -> None:
    """Show when a rule file was generated and from which build arguments."""
    header = read_header(makefile)
    if header is None:
        click.echo(f"Error: {makefile} has no z-xcmake header", err=True)
        sys.exit(1)
    click.echo(f"Generated: {format_timestamp(header.generated_at)}")
    click.echo(f"Args: {header.invocation}")


if __name__ == "__main__":
    main()
