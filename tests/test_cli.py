from __future__ import annotations

import numpy as np
import pytest

from vio_replay.config import DEFAULT_TRAJECTORY, build_arg_parser, config_from_args, parse_config
from vio_replay.scripts import replay_sanity
from vio_replay.scripts.run_mono_inertial import main


def cli_args(ds, *extra):
    return [
        str(ds["voc"]), str(ds["settings"]), str(ds["images"]), str(ds["times"]), str(ds["imu"]),
        *extra,
    ]


class TestConfig:
    def test_defaults(self, dataset):
        cfg = config_from_args(build_arg_parser().parse_args(cli_args(dataset)))
        assert cfg.n_images is None
        assert cfg.trajectory == DEFAULT_TRAJECTORY
        assert cfg.realtime
        assert cfg.benchmark_interval == 5.0
        assert not cfg.strict

    def test_options(self, dataset):
        cfg = parse_config(cli_args(dataset, "2", "--no-realtime", "--rate", "2", "--strict"))
        assert cfg.n_images == 2
        assert not cfg.realtime
        assert cfg.rate == 2.0
        assert cfg.strict

    def test_bad_rate_exits(self, dataset):
        with pytest.raises(SystemExit):
            parse_config(cli_args(dataset, "--rate", "0"))

    def test_missing_positional_exits(self):
        with pytest.raises(SystemExit):
            parse_config(["voc", "settings", "images", "times"])


def test_full_run(dataset, capsys):
    traj = dataset["root"] / "traj.txt"
    plot = dataset["root"] / "results" / "track.png"
    rc = main(cli_args(dataset, "--no-realtime", "--trajectory", str(traj), "--plot", str(plot)))

    assert rc == 0
    out = capsys.readouterr().out
    assert "Imus in data: 4" in out
    assert "image start: 0" in out
    assert "median tracking time:" in out
    assert "mean tracking time:" in out
    assert plot.exists()

    rows = np.loadtxt(traj, ndmin=2)
    np.testing.assert_allclose(rows[:, 0], [0.05, 0.15, 0.25])
    np.testing.assert_allclose(rows[:, 1], [1, 1, 1])


def test_frame_limit(dataset):
    traj = dataset["root"] / "traj.txt"
    assert main(cli_args(dataset, "2", "--no-realtime", "--trajectory", str(traj))) == 0
    assert np.loadtxt(traj, ndmin=2).shape[0] == 2


def test_empty_imu_log(dataset, capsys):
    dataset["imu"].write_text("#header only\n")
    assert main(cli_args(dataset, "--no-realtime")) == 1
    assert "Failed to load imus" in capsys.readouterr().err


def test_empty_image_index(dataset, capsys):
    dataset["times"].write_text("\n")
    assert main(cli_args(dataset, "--no-realtime")) == 1
    assert "Failed to load images" in capsys.readouterr().err


def test_missing_image(dataset, capsys):
    (dataset["images"] / f"{dataset['tokens'][1]}.png").unlink()
    traj = dataset["root"] / "traj.txt"
    assert main(cli_args(dataset, "--no-realtime", "--trajectory", str(traj))) == 1
    assert f"Failed to load image at: {dataset['images'] / dataset['tokens'][1]}.png" in capsys.readouterr().err
    assert not traj.exists()


def test_missing_imu_file(dataset, capsys):
    dataset["imu"].unlink()
    assert main(cli_args(dataset, "--no-realtime")) == 1
    assert "ERROR" in capsys.readouterr().err


def test_sanity_script(dataset, capsys):
    replay_sanity.main([str(dataset["images"]), str(dataset["times"]), str(dataset["imu"])])
    out = capsys.readouterr().out
    assert "Counts: IMU=4, Images=3" in out
    assert "image start: 0" in out
    assert "IMU consumed: 3/4" in out


def test_non_utf8_imu_header(dataset, capsys):
    body = dataset["imu"].read_bytes().split(b"\n", 1)[1]
    dataset["imu"].write_bytes(b"#t [ns], a [m/s\xb2]\n" + body)
    traj = dataset["root"] / "traj.txt"
    assert main(cli_args(dataset, "--no-realtime", "--trajectory", str(traj))) == 0
    assert "Imus in data: 4" in capsys.readouterr().out
