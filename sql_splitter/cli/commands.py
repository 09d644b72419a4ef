#!/usr/bin/env python3
"""
SQL Splitter - CLI tool for splitting large SQL files.

Splits one SQL script into several smaller files, each under a size limit,
without breaking any statement across files.
"""
import sys
import time
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sql_splitter import __version__, config
from sql_splitter.core.batch_writer import BatchCollector
from sql_splitter.core.splitter import SQLSplitter
from sql_splitter.utils import setup_logging, format_duration, format_size

# Initialize consoles for rich output
console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def print_plan(collector: BatchCollector) -> None:
    """Print the files a dry run would write."""
    table = Table(title="Planned files")
    table.add_column("#", justify="right")
    table.add_column("File")
    table.add_column("Statements", justify="right")
    table.add_column("Size", justify="right")
    for entry in collector.sorted_files():
        table.add_row(str(entry["index"]), escape(entry["path"]), str(entry["statements"]), format_size(entry["size"]))
    console.print(table)


@click.command(context_settings={"auto_envvar_prefix": config.ENV_PREFIX})
@click.version_option(version=__version__, prog_name="sql-splitter")
@click.option('--input', '-i', 'input_file', required=True,
              envvar=f"{config.ENV_PREFIX}_INPUT", show_envvar=True,
              type=click.Path(dir_okay=False),
              help='Input SQL file path')
@click.option('--output-dir', '-o', required=True,
              show_envvar=True,
              type=click.Path(file_okay=False),
              help='Output directory for split files')
@click.option('--max-size-kb', '-m', default=config.DEFAULT_MAX_SIZE_KB, type=click.IntRange(min=0),
              show_envvar=True,
              help=f'Maximum size of each split file in kilobytes (default: {config.DEFAULT_MAX_SIZE_KB})')
@click.option('--concurrent-writes', '-c', default=config.DEFAULT_CONCURRENT_WRITES, type=click.IntRange(min=1),
              show_envvar=True,
              help=f'Number of concurrent write operations (default: {config.DEFAULT_CONCURRENT_WRITES})')
@click.option('--prefix', default=config.DEFAULT_FILE_PREFIX,
              show_envvar=True,
              help=f'Output file name prefix (default: {config.DEFAULT_FILE_PREFIX})')
@click.option('--encoding', default=config.DEFAULT_ENCODING,
              show_envvar=True,
              help=f'Text encoding of the input and output files (default: {config.DEFAULT_ENCODING})')
@click.option('--dry-run', is_flag=True, help='Plan the split and report it without writing files')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(input_file: str, output_dir: str, max_size_kb: int, concurrent_writes: int,
        prefix: str, encoding: str, dry_run: bool, verbose: bool):
    """
    Split large SQL files into smaller ones while preserving statement integrity.

    Statements are packed in order into files of at most MAX_SIZE_KB kilobytes.
    A statement larger than the limit is written whole to a file of its own.
    """
    setup_logging(verbose)

    splitter = SQLSplitter(
        output_dir,
        max_size_kb=max_size_kb,
        concurrent_writes=concurrent_writes,
        prefix=prefix,
        encoding=encoding,
    )
    collector = BatchCollector()

    console.print("Starting to split SQL file...")
    start = time.perf_counter()

    try:
        if dry_run:
            batches = splitter.plan_file(input_file)
            for batch in batches:
                collector.add_file(
                    batch.index,
                    splitter.output_dir / batch.file_name(prefix),
                    len(batch),
                    len(batch.serialize().encode(encoding)),
                )
        else:
            num_files = splitter.split_file(input_file, collector=collector)
    except Exception as e:
        logger.debug("Error splitting file", exc_info=True)
        error_console.print(f"[bold red]Error splitting file:[/bold red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)

    elapsed = time.perf_counter() - start
    stats = collector.get_stats()

    if dry_run:
        print_plan(collector)
        console.print(f"[bold blue]Dry run:[/bold blue] would split SQL file into {stats['total_files']} files")
    else:
        console.print(f"[bold green]✓[/bold green] Successfully split SQL file into {num_files} files")
        console.print(f"Total size: {format_size(stats['total_bytes'])}")
    console.print(f"Time taken: {format_duration(elapsed)}")


# Export the CLI function as main for easy importing
main = cli

if __name__ == '__main__':
    cli()
