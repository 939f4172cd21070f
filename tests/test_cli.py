import numpy as np
import pytest
from PIL import Image

from pymandel.__main__ import main, parse_config
from pymandel.config import DECIMAL, SHADER, ViewerConfig
from pymandel.precision import DecimalBackend, FloatBackend, MpmathBackend
from pymandel.snapshot import render_snapshot, save_frame


def test_defaults_shader():
    config = parse_config([])
    assert config.variant == SHADER
    assert config.dims == (800, 600)
    assert config.zoom == "0.5"
    assert config.imax == 100
    assert config.center == ("0", "0")
    assert isinstance(config.make_backend(), FloatBackend)


def test_defaults_decimal():
    config = parse_config(["--variant", "decimal"])
    assert config.dims == (160, 120)
    assert config.zoom == "200"
    assert config.imax == 1000
    backend = config.make_backend()
    assert isinstance(backend, DecimalBackend)
    assert backend.precision == 28


def test_overrides():
    config = parse_config([
        "--variant", "decimal", "--backend", "mpmath", "--precision", "60",
        "--dims", "32", "24", "--zoom", "1e6", "--center", "-0.75", "0.1", "--imax", "50",
    ])
    assert config.dims == (32, 24)
    assert config.imax == 50
    backend = config.make_backend()
    assert isinstance(backend, MpmathBackend)
    assert backend.precision == 60
    viewport = config.make_viewport(backend)
    assert viewport.zoom == backend.scalar("1e6")


@pytest.mark.parametrize(
    "argv",
    [
        ["--zoom", "0"],
        ["--zoom", "-2"],
        ["--zoom", "abc"],
        ["--dims", "0", "10"],
        ["--imax", "0"],
        ["--variant", "quad"],
        ["--variant", "decimal", "--center", "x", "0"],
    ],
)
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit):
        parse_config(argv)


def test_config_rejects_unknown_variant():
    with pytest.raises(ValueError):
        ViewerConfig(variant="webgl")


def test_save_frame_flips_rows(tmp_path):
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[0, :, :3] = 10   # bottom row
    rgba[1, :, :3] = 200  # top row

    path = tmp_path / "frame.png"
    save_frame(path, rgba)

    img = np.asarray(Image.open(path))
    assert img.shape == (2, 3, 4)
    assert (img[0, :, 0] == 200).all()
    assert (img[1, :, 0] == 10).all()


def test_snapshot_shader(tmp_path):
    path = tmp_path / "shader.png"
    config = ViewerConfig(variant=SHADER, dims=(40, 30), out_file=str(path))
    rgba = render_snapshot(config)

    img = Image.open(path)
    assert img.size == (40, 30)
    assert img.mode == "RGBA"
    # Center of the default view is inside the set: white for the shader renderer
    assert tuple(rgba[15, 20]) == (255, 255, 255, 255)


def test_snapshot_decimal(tmp_path):
    path = tmp_path / "decimal.png"
    config = ViewerConfig(variant=DECIMAL, dims=(12, 8), zoom="4", imax=25, out_file=str(path))
    rgba = render_snapshot(config)

    assert Image.open(path).size == (12, 8)
    # Center of the default view is inside the set: black for the decimal renderer
    assert tuple(rgba[4, 6]) == (0, 0, 0, 255)


def test_main_writes_file(tmp_path, capsys):
    path = tmp_path / "out.png"
    status = main(["--dims", "20", "10", "-o", str(path), "-v"])

    assert status == 0
    assert path.exists()
    out = capsys.readouterr().out
    assert "variant: shader" in out
    assert f"Saved: {path}" in out
