import json
import pytest
import yaml
from shellres.analysis import ResidenceAnalysis
from shellres.cli import main
from shellres.utils.config_manager import AnalysisConfig

def atom_line(atom_id, element, x):
    return f"{atom_id:6d}  {element:<3s}{x:12.6f}{0.0:12.6f}{0.0:12.6f}   101     2     3\n"

def frame(inside, outside=(), index=0):
    lines = ["   4  water box\n",
             "    30.000000   30.000000   30.000000   90.000000   90.000000   90.000000\n",
             atom_line(1, "Zn", 0.0)]
    lines += [atom_line(i, "O", 1.5) for i in inside]
    lines += [atom_line(i, "O", 12.0) for i in outside]
    lines.append(f"{index}\n")
    return "".join(lines)

@pytest.fixture
def trajectory(tmp_path):
    path = tmp_path / "liquid.arc"
    path.write_text(frame([10], [11], 1) + frame([10, 11], (), 2) + frame([10], [11], 3))
    return path

@pytest.fixture
def config(tmp_path, trajectory):
    return AnalysisConfig(input_path=str(trajectory),
                          output_path=str(tmp_path / "bins.txt"),
                          log_path=str(tmp_path / "log.txt"),
                          show_progress=False)

def test_full_run_outputs(config):
    result = ResidenceAnalysis(config).run()
    assert result.frame_count == 3
    assert [(r.atom_id, r.first_frame, r.last_frame) for r in result.parse.residences] == [(11, 2, 3)]
    with open(config.output_path) as f:
        assert f.read() == (
            "0.000000e+00, 3.000000e-12, 6.000000e-12, 1\n"
            "6.000000e-12, 9.000000e-12, 1.200000e-11, 0\n"
            "1.200000e-11, 1.500000e-11, 1.800000e-11, 0\n"
        )
    with open(config.log_path) as f:
        assert f.read() == (
            "Frame number 1:\nCurrent Atoms:\n10, \nAtoms Entering\n10, \n"
            "Frame number 2:\nCurrent Atoms:\n10, 11, \nAtoms Entering\n11, \n"
            "Frame number 3:\nCurrent Atoms:\n10, \nAtoms Leaving\n11, \n"
            "Residence #0: t = 2.000000e-12(2-3)\n"
        )

def test_rerun_is_byte_identical(config):
    ResidenceAnalysis(config).run()
    with open(config.output_path, 'rb') as f: first_bins = f.read()
    with open(config.log_path, 'rb') as f: first_log = f.read()
    ResidenceAnalysis(config).run()
    with open(config.output_path, 'rb') as f: assert f.read() == first_bins
    with open(config.log_path, 'rb') as f: assert f.read() == first_log

def test_flush_open_writes_residence_line(config):
    config.flush_open_on_eof = True
    result = ResidenceAnalysis(config).run()
    assert len(result.parse.residences) == 2
    with open(config.log_path) as f:
        assert f.read().endswith("Residence #1: t = 4.000000e-12(1-3)\n")

def test_summary_and_plot(config, tmp_path):
    config.summary_path = str(tmp_path / "summary.json")
    config.plot_path = str(tmp_path / "plots" / "hist.png")
    ResidenceAnalysis(config).run()
    with open(config.summary_path) as f:
        summary = json.load(f)
    assert summary['frame_count'] == 3
    assert summary['n_residences'] == 1
    assert summary['n_counted'] == 1
    assert summary['n_open_at_eof'] == 1
    assert summary['mean_residence_time'] == pytest.approx(2e-12)
    assert summary['mean_shell_members'] == pytest.approx(4 / 3)
    assert summary['config']['shell_dist'] == 3.6
    assert (tmp_path / "plots" / "hist.png").stat().st_size > 0

def test_zero_residences_run(tmp_path, caplog):
    traj = tmp_path / "still.arc"
    traj.write_text(frame([], [11], 1) + frame([], [11], 2))
    cfg = AnalysisConfig(input_path=str(traj), output_path=str(tmp_path / "bins.txt"),
                         log_path=str(tmp_path / "log.txt"), show_progress=False)
    with caplog.at_level("INFO"):
        result = ResidenceAnalysis(cfg).run()
    assert result.histogram.mean_residence_time is None
    assert "No completed residences found" in caplog.text
    assert (tmp_path / "log.txt").read_text() == ""
    assert (tmp_path / "bins.txt").read_text().count("\n") == 2

def test_missing_trajectory_raises(config, tmp_path):
    config.input_path = str(tmp_path / "missing.arc")
    with pytest.raises(FileNotFoundError):
        ResidenceAnalysis(config).run()

def test_cli_run(trajectory, tmp_path):
    out, log = tmp_path / "cli_bins.txt", tmp_path / "cli_log.txt"
    main(['--trajectory', str(trajectory), '--output', str(out), '--log', str(log),
          '--bin-width', '1e-12', '--no-progress'])
    lines = out.read_text().splitlines()
    assert len(lines) == 3
    assert lines[2] == "2.000000e-12, 2.500000e-12, 3.000000e-12, 1"

def test_cli_config_file_with_overrides(trajectory, tmp_path):
    cfg_file = tmp_path / "run.yaml"
    cfg_file.write_text(yaml.dump({
        'trajectory': {'input_path': str(trajectory)},
        'analysis': {'shell_dist': 1.0},
        'output': {'output_path': str(tmp_path / "cfg_bins.txt"), 'log_path': str(tmp_path / "cfg_log.txt"),
                   'show_progress': False},
    }))
    # shell_dist 1.0 puts every oxygen outside; the CLI override brings them back
    main(['--config', str(cfg_file), '--shell-dist', '2.0'])
    assert "Residence #0" in (tmp_path / "cfg_log.txt").read_text()

@pytest.mark.parametrize("extra_args", [
    ['--trajectory', 'does_not_exist.arc'],
    ['--bin-width', '-1'],
    ['--config', 'missing.yaml'],
])
def test_cli_failures_exit_nonzero(tmp_path, extra_args):
    args = ['--output', str(tmp_path / "b.txt"), '--log', str(tmp_path / "l.txt"), '--no-progress']
    if '--trajectory' in extra_args:
        extra_args = ['--trajectory', str(tmp_path / extra_args[1])]
    elif '--config' in extra_args:
        extra_args = ['--config', str(tmp_path / extra_args[1])]
    with pytest.raises(SystemExit) as excinfo:
        main(args + extra_args)
    assert excinfo.value.code == 1

def test_cli_unwritable_log_exits_nonzero(trajectory, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(['--trajectory', str(trajectory), '--log', str(tmp_path / "nope" / "log.txt"),
              '--output', str(tmp_path / "b.txt"), '--no-progress'])
    assert excinfo.value.code == 1
