import logging

import pytest
from click.testing import CliRunner

from statslab.cli import main


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    # handlers bound to the runner's captured stderr outlive the invocation
    logger = logging.getLogger("statslab")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("5 3 8 3\n", encoding="utf-8")
    return path


def test_report_to_stdout(runner, data_file):
    result = runner.invoke(main, ["report", str(data_file)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "DATA (sorted, n=4): 3 3 5 8"
    assert "Mean: 4.75" in lines
    assert "Variance (sample): 5.58333" in lines
    assert "Frequency Table" in lines


def test_report_population_flag(runner, data_file):
    result = runner.invoke(main, ["--population", "report", str(data_file)])
    assert result.exit_code == 0, result.output
    assert "Variance (population): 4.1875" in result.output


def test_report_to_file(runner, data_file, tmp_path):
    output = tmp_path / "results.txt"
    result = runner.invoke(main, ["report", str(data_file), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert "Saved results to:" in result.output
    assert output.read_text(encoding="utf-8").startswith("DATA (sorted, n=4): 3 3 5 8")


def test_report_to_unwritable_file(runner, data_file, tmp_path):
    output = tmp_path / "missing" / "results.txt"
    result = runner.invoke(main, ["report", str(data_file), "-o", str(output)])
    assert result.exit_code == 1
    assert "Could not write file" in result.output


def test_report_empty_dataset(runner):
    result = runner.invoke(main, ["report"])
    assert result.exit_code == 1
    assert "Dataset is empty." in result.output


def test_missing_data_file(runner, tmp_path):
    result = runner.invoke(main, ["report", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "Could not open file" in result.output


def test_file_with_undecodable_bytes(runner, tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1 2 caf\xe9 3\n")

    result = runner.invoke(main, ["stat", "size", str(path)])
    assert result.exit_code == 0, result.output
    assert "Size = 3" in result.output


def test_values_and_files_combine(runner, data_file):
    result = runner.invoke(main, ["stat", "size", str(data_file), "-x", "10", "-x", "11"])
    assert result.exit_code == 0, result.output
    assert "Size = 6" in result.output


@pytest.mark.parametrize("name,expected", [
    ("mean", "Mean = 4.75"),
    ("median", "Median = 4"),
    ("modes", "Mode(s): 3"),
    ("variance", "Variance (sample) = 5.58333"),
    ("sum-squares", "Sum of Squares = 107"),
    ("outliers", "Outliers (Tukey +/- 1.5*IQR): (none)"),
])
def test_single_statistic(runner, data_file, name, expected):
    result = runner.invoke(main, ["stat", name, str(data_file)])
    assert result.exit_code == 0, result.output
    assert expected in result.output


def test_stat_quartiles(runner, data_file):
    result = runner.invoke(main, ["stat", "quartiles", str(data_file)])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "Quartiles:",
        "Q1 = 3",
        "Q2 (Median) = 4",
        "Q3 = 6.5",
    ]


def test_stat_kurtosis(runner):
    args = ["stat", "kurtosis", "-x", "0", "-x", "9", "-x", "34", "-x", "92"]
    result = runner.invoke(main, args)
    assert result.exit_code == 0, result.output
    assert "Kurtosis (Pearson) = 14.9449" in result.output


def test_stat_undefined_result(runner):
    result = runner.invoke(main, ["stat", "cv", "--value=-5", "--value=5"])
    assert result.exit_code == 1
    assert (
        "Exception Error: Coefficient of Variation is undefined when the mean is 0."
        in result.output
    )


def test_stat_insufficient_data(runner):
    result = runner.invoke(main, ["stat", "stdev", "-x", "1"])
    assert result.exit_code == 1
    assert "requires at least 2 value(s)" in result.output


def test_stat_unknown_name(runner, data_file):
    result = runner.invoke(main, ["stat", "geometric-mean", str(data_file)])
    assert result.exit_code == 2


def test_freq_command(runner, data_file):
    result = runner.invoke(main, ["freq", str(data_file)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Frequency Table"
    assert lines[3].split() == ["3", "2", "50.00"]


def test_random_values_follow_config(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("random_low: 1\nrandom_high: 6\nrandom_seed: 7\n", encoding="utf-8")

    args = ["-c", str(config), "stat", "size", "--random", "25"]
    result = runner.invoke(main, args)
    assert result.exit_code == 0, result.output
    assert "Size = 25" in result.output

    first = runner.invoke(main, ["-c", str(config), "freq", "--random", "25"])
    second = runner.invoke(main, ["-c", str(config), "freq", "--random", "25"])
    assert first.output == second.output
    for line in first.output.splitlines()[3:]:
        assert 1 <= float(line.split()[0]) <= 6


def test_config_mode_and_override(runner, data_file, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("mode: population\n", encoding="utf-8")

    result = runner.invoke(main, ["-c", str(config), "stat", "variance", str(data_file)])
    assert "Variance (population) = 4.1875" in result.output

    result = runner.invoke(
        main, ["-c", str(config), "--sample", "stat", "variance", str(data_file)]
    )
    assert "Variance (sample) = 5.58333" in result.output


def test_invalid_config(runner, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("mode: median\n", encoding="utf-8")

    result = runner.invoke(main, ["-c", str(config), "stat", "size"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
