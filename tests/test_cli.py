"""Tests for the command-line front end."""

import numpy as np
from PIL import Image


def test_cli_writes_png(tmp_path, capsys):
    from perlingrey.__main__ import main
    from perlingrey import GradientLattice, render_pixels
    out = tmp_path / "nested" / "noise.png"
    assert main(["32", str(out), "42"]) == 0

    with Image.open(out) as img:
        assert img.mode == "L"
        assert img.size == (32, 32)
        arr = np.array(img)
    np.testing.assert_array_equal(arr, render_pixels(GradientLattice(32, seed=42)))

    stdout = capsys.readouterr().out
    assert "Your seed is" not in stdout
    assert "Saved noise (32x32)" in stdout


def test_cli_prints_generated_seed(tmp_path, capsys):
    from perlingrey.__main__ import main
    from perlingrey import GradientLattice, render_pixels
    out = tmp_path / "noise.png"
    assert main(["24", str(out)]) == 0

    first = capsys.readouterr().out.splitlines()[0]
    assert first.startswith("Your seed is: ")
    seed = int(first.split(": ")[1])
    with Image.open(out) as img:
        arr = np.array(img)
    np.testing.assert_array_equal(arr, render_pixels(GradientLattice(24, seed=seed)))


def test_cli_invalid_width(tmp_path, capsys):
    from perlingrey.__main__ import main
    for width in ["0", "abc", "-5"]:
        assert main([width, str(tmp_path / "x.png"), "1"]) == 1
        assert "positive integer not entered" in capsys.readouterr().err
    assert not (tmp_path / "x.png").exists()


def test_cli_invalid_seed(tmp_path, capsys):
    from perlingrey.__main__ import main
    assert main(["8", str(tmp_path / "x.png"), "seed"]) == 1
    assert "seed" in capsys.readouterr().err


def test_cli_encode_failure(tmp_path, capsys):
    from perlingrey.__main__ import main
    assert main(["8", str(tmp_path), "1"]) == 2
    assert "could not be encoded" in capsys.readouterr().err


def test_cli_scale_option(tmp_path):
    from perlingrey.__main__ import main
    out = tmp_path / "noise.png"
    assert main(["--scale", "8", "16", str(out), "3"]) == 0
    with Image.open(out) as img:
        assert img.size == (16, 16)


def test_cli_non_power_of_two_scale(tmp_path):
    from perlingrey.__main__ import main
    out = tmp_path / "noise.png"
    assert main(["--scale", "3", "32", str(out), "9"]) == 0
    with Image.open(out) as img:
        assert img.size == (32, 32)
