"""
Command line entry point: builds a dataset from files, values and random
draws, then prints statistics or writes the full report.

Usage:
    statslab report data.txt                       # full report to stdout
    statslab --population report data.txt -o out.txt
    statslab stat kurtosis -x 0 -x 9 -x 34 -x 92
    statslab freq --random 50
"""

import logging
import math
from pathlib import Path
from typing import Sequence

import click
import numpy as np

from statslab.config import StatsConfig, load_config
from statslab.dataset import Dataset
from statslab.exceptions import ConfigurationError, StatisticError
from statslab.importing import insert_from_file, insert_random
from statslab.log import setup_logging
from statslab.report import (
    format_number,
    format_values,
    render_all,
    render_frequency_table,
    write_to_file,
)
from statslab.statistics import STATISTICS, Quartiles, evaluate

logger = logging.getLogger(__name__)


def data_sources(func):
    """Shared FILES / --value / --random options of every command."""
    func = click.option(
        '--random', 'random_count',
        type=click.IntRange(min=0),
        default=0,
        help='Insert N random integers from the configured range',
    )(func)
    func = click.option(
        '--value', '-x', 'values',
        type=float,
        multiple=True,
        help='Insert a single value (repeatable)',
    )(func)
    func = click.argument(
        'files',
        nargs=-1,
        type=click.Path(dir_okay=False, path_type=Path),
    )(func)
    return func


def build_dataset(
    config: StatsConfig,
    files: Sequence[Path],
    values: Sequence[float],
    random_count: int,
) -> Dataset:
    """Fill a dataset from the command line data sources."""
    dataset = Dataset(mode=config.estimation_mode)

    for path in files:
        try:
            insert_from_file(dataset, path)
        except OSError:
            raise click.ClickException(f"Could not open file: {path}")

    for value in values:
        if not math.isfinite(value):
            raise click.BadParameter(f"{value} is not a finite number",
                                     param_hint="'--value'")
        dataset.insert(value)

    if random_count:
        rng = np.random.default_rng(config.random_seed)
        insert_random(dataset, random_count, config.random_low, config.random_high, rng=rng)

    logger.debug(f"Built {dataset!r}")
    return dataset


@click.group()
@click.option(
    '--config', '-c',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML configuration file',
)
@click.option(
    '--population/--sample',
    'population',
    default=None,
    help='Estimation mode (overrides the configuration)',
)
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.pass_context
def main(ctx, config, population, verbose):
    """Descriptive statistics over a sorted numeric dataset."""
    try:
        stats_config = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(e.message)

    if population is not None:
        stats_config.mode = "population" if population else "sample"

    setup_logging('DEBUG' if verbose else stats_config.log_level)
    ctx.obj = stats_config


@main.command()
@data_sources
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write the report to this file instead of stdout',
)
@click.pass_obj
def report(config, files, values, random_count, output):
    """Print (or save) every statistic and the frequency table."""
    dataset = build_dataset(config, files, values, random_count)
    try:
        if output is None:
            click.echo(render_all(dataset, outlier_multiplier=config.outlier_multiplier), nl=False)
            return
        saved = write_to_file(dataset, output, outlier_multiplier=config.outlier_multiplier)
    except StatisticError as e:
        raise click.ClickException(e.message)

    if not saved:
        raise click.ClickException(f"Could not write file: {output}")
    click.echo(f"Saved results to: {output}")


@main.command()
@click.argument('name', type=click.Choice(['size'] + list(STATISTICS)))
@data_sources
@click.pass_context
def stat(ctx, name, files, values, random_count):
    """Print a single statistic NAME."""
    dataset = build_dataset(ctx.obj, files, values, random_count)
    if name == 'size':
        click.echo(f"Size = {dataset.size()}")
        return

    outcome = evaluate(name, dataset)
    if not outcome.ok:
        click.echo(f"Exception Error: {outcome.error}", err=True)
        ctx.exit(1)

    value = outcome.value
    if isinstance(value, Quartiles):
        click.echo(
            f"Quartiles:\nQ1 = {format_number(value.q1)}"
            f"\nQ2 (Median) = {format_number(value.q2)}"
            f"\nQ3 = {format_number(value.q3)}"
        )
    elif name == 'frequency':
        click.echo("\n".join(render_frequency_table(dataset)))
    elif isinstance(value, list):
        click.echo(f"{outcome.title}: {format_values(value)}")
    else:
        click.echo(f"{outcome.title} = {format_number(value)}")


@main.command()
@data_sources
@click.pass_obj
def freq(config, files, values, random_count):
    """Print the frequency table."""
    dataset = build_dataset(config, files, values, random_count)
    try:
        lines = render_frequency_table(dataset)
    except StatisticError as e:
        raise click.ClickException(e.message)
    click.echo("\n".join(lines))
