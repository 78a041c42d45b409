import logging

import numpy as np
import pytest

from gridfield.cli import build_parser, main

PROPS = "0 3 3\n0 3 3\n1 0 0 0\n1 1 0.5 5\n"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("gridfield")
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize("backend", ["splu", "banded"])
def test_cli_solves_and_writes_field(tmp_path, backend) -> None:
    inp = tmp_path / "properties.txt"
    out = tmp_path / "field.txt"
    inp.write_text(PROPS, encoding="utf-8")

    rc = main([str(inp), str(out), "--backend", backend, "--fmt", "%.12g", "-q"])

    assert rc == 0
    F = np.loadtxt(out, ndmin=2)
    assert F.shape == (3, 3)
    assert F[1, 1] == pytest.approx(5.0)
    assert F[0, 0] > F[2, 0]


def test_cli_log_file_records_run(tmp_path) -> None:
    inp = tmp_path / "properties.txt"
    inp.write_text(PROPS, encoding="utf-8")
    log = tmp_path / "run.log"

    assert main([str(inp), str(tmp_path / "f.txt"), "--log-file", str(log)]) == 0

    text = log.read_text(encoding="utf-8")
    assert "input file:" in text
    assert "Box boundary conditions: top=1" in text
    assert "circle 0: center=(1, 1) radius=0.5 value=5" in text
    assert "elapsed time" in text


@pytest.mark.parametrize(
    "content",
    [
        "0 3 3\n0 3 3\n1 0 0 0\n1 1 0.5\n",  # partial record
        "0 3 0\n0 3 3\n1 0 0 0\n",  # empty grid
    ],
)
def test_cli_reports_bad_input(tmp_path, content) -> None:
    inp = tmp_path / "properties.txt"
    inp.write_text(content, encoding="utf-8")
    out = tmp_path / "field.txt"

    assert main([str(inp), str(out), "-q"]) == 1
    assert not out.exists()


def test_cli_missing_input_file(tmp_path) -> None:
    assert main([str(tmp_path / "nope.txt"), str(tmp_path / "f.txt"), "-q"]) == 1


def test_cli_usage_error_exits_2() -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["only-one-arg"])
    assert exc.value.code == 2

    with pytest.raises(SystemExit):
        main(["a", "b", "--backend", "cg"])
