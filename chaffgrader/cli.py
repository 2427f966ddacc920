"""CLI interface for chaffgrader"""

import logging
import sys

import click

from chaffgrader import __version__
from chaffgrader.autograder import Autograder
from chaffgrader.config import LOG_LEVEL
from chaffgrader.loaders import (
    InputFormatError,
    read_evaluations_from_file,
    read_point_table_from_file,
    write_report_to_file,
)

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__)
@click.argument("infile", type=click.Path(dir_okay=False))
@click.argument("outfile", type=click.Path(dir_okay=False))
@click.argument("scorefile", type=click.Path(dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log per-item verdicts")
@click.option("--summary", is_flag=True, default=False, help="Print the score summaries")
def main(infile: str, outfile: str, scorefile: str, verbose: bool, summary: bool):
    """Grade wheat, chaff, and functionality results into a report

    INFILE is the execution phase's JSON results, OUTFILE the report to
    write, and SCOREFILE the JSON point table.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else LOG_LEVEL)

    try:
        records = read_evaluations_from_file(infile)
        point_table = read_point_table_from_file(scorefile)
    except InputFormatError as e:
        click.echo(f"[ERROR] {e}", err=True)
        sys.exit(1)

    report = Autograder(point_table).grade(records)
    output_path = write_report_to_file(outfile, report)

    if summary:
        for item in report.summaries():
            click.echo(f"  {item.name}: {item.score}/{item.max_score}")
        click.echo(f"  Report saved to: {output_path}")


if __name__ == "__main__":
    main()
