"""
Command Line Tests
"""

import pytest
import yaml

import main
from config import SimulationConfig
from simulator.exceptions import InvalidParameterError


def write_config(path, **traffic):
    data = {
        'simulation': {
            'building': {'num_floors': 6},
            'elevator': {'num_elevators': 2},
            'traffic': {'arrival_probability': 0.4, 'simulation_length': 40, **traffic},
            'random_seed': 12,
        }
    }
    path.write_text(yaml.dump(data), encoding='utf-8')
    return path


def answers(*values):
    remaining = list(values)
    return lambda prompt: remaining.pop(0)


def test_prompt_reads_four_parameters(capsys):
    config = main.prompt_simulation_config(answers("0.5", "10", "3", "25"))

    assert (config.probability, config.num_floors, config.num_elevators, config.length) == (0.5, 10, 3, 25)
    assert "Welcome to the Elevator simulator!" in capsys.readouterr().out


def test_prompt_rejects_out_of_range_values():
    with pytest.raises(InvalidParameterError):
        main.prompt_simulation_config(answers("1.5", "10", "3", "25"))


def test_run_simulation_prints_summary(capsys):
    config = SimulationConfig.create(0.0, 5, 1, 10, random_seed=1)

    result, stats = main.run_simulation(config)

    out = capsys.readouterr().out
    assert "Elevator Results:" in out
    assert "Total Wait Time: 0" in out
    assert "Total Requests: 0" in out
    assert "Average Wait Time: 0.00" in out
    assert result.total_requests_served == 0
    assert stats.requests == {}


def test_run_simulation_writes_outputs(tmp_path):
    config = SimulationConfig.create(0.5, 6, 2, 50, random_seed=3)
    config.output.event_log = str(tmp_path / "log.jsonl")
    config.output.trajectory_plot = str(tmp_path / "plot.png")

    main.run_simulation(config)

    assert (tmp_path / "log.jsonl").exists()
    assert (tmp_path / "plot.png").exists()


def test_main_with_config_file(tmp_path, capsys):
    path = write_config(tmp_path / "run.yaml")

    assert main.main([str(path)]) == 0
    assert "Average Wait Time:" in capsys.readouterr().out


def test_main_same_config_same_output(tmp_path, capsys):
    path = write_config(tmp_path / "run.yaml")

    main.main([str(path)])
    first = capsys.readouterr().out
    main.main([str(path)])
    second = capsys.readouterr().out

    summary = lambda out: [line for line in out.splitlines() if line.startswith(("Total", "Average"))]
    assert summary(first) == summary(second)


@pytest.mark.parametrize("traffic", [
    {'arrival_probability': 3.0},
    {'arrival_probability': '0.5'},
    {'simulation_length': 'long'},
])
def test_main_reports_invalid_config(tmp_path, capsys, traffic):
    path = write_config(tmp_path / "bad.yaml", **traffic)

    assert main.main([str(path)]) == 1
    assert "Error:" in capsys.readouterr().out


@pytest.mark.parametrize("text", ["simulation:\n  traffic: fast\n", "- 1\n- 2\n"])
def test_main_reports_malformed_config(tmp_path, capsys, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding='utf-8')

    assert main.main([str(path)]) == 1
    assert "Error:" in capsys.readouterr().out


def test_main_runs_with_empty_simulation_section(tmp_path, capsys):
    path = tmp_path / "defaults.yaml"
    path.write_text("simulation:\n", encoding='utf-8')

    assert main.main([str(path)]) == 0
    assert "Elevator Results:" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path, capsys):
    assert main.main([str(tmp_path / "nope.yaml")]) == 1
    assert "Config file not found" in capsys.readouterr().out


def test_main_interactive(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", answers("0.3", "4", "1", "15"))

    assert main.main([]) == 0
    assert "Elevator Results:" in capsys.readouterr().out


def test_main_interactive_non_numeric(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", answers("often", "4", "1", "15"))

    assert main.main([]) == 1
    assert "invalid input" in capsys.readouterr().out
