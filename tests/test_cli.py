# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from pathlib import Path

import pytest
from click.testing import CliRunner

from bezier_superpowers.cli import main

svg_content = """<svg xmlns="http://www.w3.org/2000/svg">
  <path id="corner" d="M0 0 L150 0 l0 150"/>
  <line id="diagonal" x1="0" y1="100" x2="100" y2="0"/>
</svg>"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def svg_file(tmp_path: Path) -> Path:
    path = tmp_path / "paths.svg"
    path.write_text(svg_content, encoding="utf-8")
    return path


def test_length(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(main, ["length", str(svg_file)])
    assert result.exit_code == 0
    assert result.output == "300\n"


def test_point(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(main, ["point", str(svg_file), "0.5"])
    assert result.exit_code == 0
    assert result.output == "150 0\n"


@pytest.mark.parametrize(
    "toolkit, expected", [("uikit", "slope 1\nangle 45\n"), ("appkit", "slope -1\nangle -45\n")]
)
def test_tangent(runner: CliRunner, svg_file: Path, toolkit: str, expected: str) -> None:
    """Slope and angle are printed in the convention of the chosen toolkit."""
    result = runner.invoke(
        main, ["--toolkit", toolkit, "tangent", str(svg_file), "0.5", "--index", "1"]
    )
    assert result.exit_code == 0
    assert result.output == expected


def test_perpendicular(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(
        main, ["--precision", "quality", "perpendicular", str(svg_file), "40", "30"]
    )
    assert result.exit_code == 0
    assert result.output == "40 0\ndistance 30\n"


def test_paths(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(main, ["paths", str(svg_file)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "0\tcorner\tlength 300\tbounds 0 0 150 150"
    assert lines[1].startswith("1\tdiagonal\tlength 141.421")


def test_index_out_of_range(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(main, ["length", str(svg_file), "--index", "2"])
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_errors(runner: CliRunner, tmp_path: Path) -> None:
    """Unreadable documents and documents without paths are reported."""
    broken = tmp_path / "broken.svg"
    broken.write_text("<svg>", encoding="utf-8")
    result = runner.invoke(main, ["length", str(broken)])
    assert result.exit_code == 1
    assert "Failed to parse SVG" in result.output

    empty = tmp_path / "empty.svg"
    empty.write_text("<svg/>", encoding="utf-8")
    result = runner.invoke(main, ["length", str(empty)])
    assert result.exit_code == 1
    assert "No paths found" in result.output


def test_verbose(runner: CliRunner, svg_file: Path) -> None:
    result = runner.invoke(main, ["--verbose", "length", str(svg_file)])
    assert result.exit_code == 0
    assert result.output.splitlines()[-1] == "300"


def test_paths_skips_out_of_range_numbers(runner: CliRunner, tmp_path: Path) -> None:
    """Shapes with overflowing numbers are left out of the listing."""
    svg = tmp_path / "huge.svg"
    svg.write_text(
        """<svg xmlns="http://www.w3.org/2000/svg">
          <path id="huge" d="M0 0 Q 1e400 0 1 1"/>
          <line id="good" x2="10"/>
        </svg>""",
        encoding="utf-8",
    )
    result = runner.invoke(main, ["paths", str(svg)])
    assert result.exit_code == 0
    assert "0\tgood\tlength 10\tbounds 0 0 10 0" in result.output
    assert "1\t" not in result.output
