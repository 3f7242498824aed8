"""Plain-text report with every statistic and the frequency table."""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, TextIO, Union

from statslab import statistics as st
from statslab.dataset import Dataset
from statslab.exceptions import EmptyDatasetError, StatisticError

logger = logging.getLogger(__name__)

VALUE_WIDTH = 10
FREQUENCY_WIDTH = 12
PERCENT_WIDTH = 12


def format_number(value: float) -> str:
    """Shortest general form with six significant digits."""
    return f"{value:g}"


def format_values(values: Iterable[float], separator: str = " ") -> str:
    """Space-separated numbers, or ``(none)`` when there are none."""
    text = separator.join(format_number(v) for v in values)
    return text or "(none)"


def _statistic_line(label: str, compute: Callable[[], Any],
                    fmt: Callable[[Any], str] = format_number) -> str:
    try:
        return f"{label}: {fmt(compute())}"
    except StatisticError as e:
        return f"{label}: undefined ({e})"


def _format_quartiles(q: st.Quartiles) -> str:
    return ", ".join(format_number(x) for x in q)


def render_statistics(dataset: Dataset, outlier_multiplier: float = st.TUKEY_MULTIPLIER) -> List[str]:
    """Labelled statistic lines in report order."""
    sample = dataset.sample
    mode = "sample" if sample else "population"
    return [
        _statistic_line("Min", lambda: st.minimum(dataset)),
        _statistic_line("Max", lambda: st.maximum(dataset)),
        _statistic_line("Range", lambda: st.value_range(dataset)),
        _statistic_line("Sum", lambda: st.total(dataset)),
        _statistic_line("Mean", lambda: st.mean(dataset)),
        _statistic_line("Median", lambda: st.median(dataset)),
        _statistic_line("Mode(s)", lambda: st.modes(dataset), format_values),
        _statistic_line(f"Variance ({mode})", lambda: st.variance(dataset, sample)),
        _statistic_line(f"Std Dev ({mode})", lambda: st.stdev(dataset, sample)),
        _statistic_line("Midrange", lambda: st.midrange(dataset)),
        _statistic_line("Quartiles (Q1,Q2,Q3)", lambda: st.quartiles(dataset), _format_quartiles),
        _statistic_line("IQR", lambda: st.iqr(dataset)),
        _statistic_line(
            f"Outliers (Tukey +/- {format_number(outlier_multiplier)}*IQR)",
            lambda: st.outliers(dataset, outlier_multiplier),
            format_values,
        ),
        _statistic_line("Sum of Squares", lambda: st.sum_squares(dataset)),
        _statistic_line("Mean Abs Deviation", lambda: st.mean_abs_deviation(dataset)),
        _statistic_line("RMS", lambda: st.rms(dataset)),
        _statistic_line("SEM", lambda: st.sem(dataset, sample)),
        _statistic_line("Skewness", lambda: st.skewness(dataset, sample)),
        _statistic_line("Kurtosis (Pearson)", lambda: st.kurtosis(dataset)),
        _statistic_line("Kurtosis Excess", lambda: st.kurtosis_excess(dataset)),
        _statistic_line(
            "Coefficient of Variation",
            lambda: st.coefficient_of_variation(dataset, sample),
        ),
        _statistic_line(
            "Relative Std Dev (%)",
            lambda: st.relative_std_deviation(dataset, sample),
        ),
    ]


def render_frequency_table(dataset: Dataset) -> List[str]:
    """Frequency table section: title, header and one row per distinct value."""
    rows = st.frequency_table(dataset)
    count = dataset.size()
    lines = [
        "Frequency Table",
        "",
        f"{'Value':<{VALUE_WIDTH}}{'Frequency':<{FREQUENCY_WIDTH}}Frequency %",
    ]
    for row in rows:
        percent = 100.0 * row.count / count
        lines.append(
            f"{format_number(row.value):<{VALUE_WIDTH}}"
            f"{row.count:<{FREQUENCY_WIDTH}}"
            f"{percent:<{PERCENT_WIDTH}.2f}"
        )
    return lines


def render_all(
    dataset: Dataset,
    stream: Optional[TextIO] = None,
    outlier_multiplier: float = st.TUKEY_MULTIPLIER,
) -> str:
    """
    Render the full report for *dataset*.

    Mode-sensitive statistics use the dataset's estimation mode. A statistic
    whose own minimum size is not met, or whose result is undefined, is
    rendered as ``undefined (<reason>)``.

    Args:
        dataset: Dataset to describe
        stream: Optional text stream to also write the report to
        outlier_multiplier: IQR multiplier for the outlier fences

    Returns:
        The report text

    Raises:
        EmptyDatasetError: If the dataset has no values
    """
    if dataset.size() == 0:
        raise EmptyDatasetError("Report")

    lines = [f"DATA (sorted, n={dataset.size()}): {format_values(dataset)}", ""]
    lines.extend(render_statistics(dataset, outlier_multiplier))
    lines.append("")
    lines.extend(render_frequency_table(dataset))
    text = "\n".join(lines) + "\n"

    if stream is not None:
        stream.write(text)
    return text


def write_to_file(
    dataset: Dataset,
    path: Union[str, Path],
    outlier_multiplier: float = st.TUKEY_MULTIPLIER,
) -> bool:
    """
    Render the report and write it to *path*.

    The text goes to a sibling temporary file that replaces *path* only
    after it is fully written, so a failed write never leaves a partial
    report behind.

    Returns:
        True on success, False if the destination could not be written

    Raises:
        EmptyDatasetError: If the dataset has no values
    """
    text = render_all(dataset, outlier_multiplier=outlier_multiplier)
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        tmp_path.replace(path)
    except OSError as e:
        logger.error(f"Error writing report to {path}: {e}")
        if tmp_path.exists():
            tmp_path.unlink()
        return False

    logger.info(f"Saved report for {dataset.size()} values to {path}")
    return True
