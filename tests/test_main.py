import pandas as pd

from main import parse_args, run


def test_defaults():
    args = parse_args([])
    assert args.vms == 5
    assert args.tasks == 20
    assert args.policy == "first_fit"
    assert args.threshold == 50


def test_run_writes_csv(tmp_path):
    path = tmp_path / "out.csv"
    result = run(["--seed", "11", "--quiet", "--csv", str(path)])

    assert len(result.events) == 20
    assert len(result.final_vm_states) == 5
    assert len(pd.read_csv(path)) == 20


def test_run_is_reproducible(capsys):
    first = run(["--seed", "5", "--vms", "3", "--tasks", "12"])
    second = run(["--seed", "5", "--vms", "3", "--tasks", "12"])
    assert first.summary == second.summary
    out = capsys.readouterr().out
    assert "DVFS-Based Power-Aware Scheduling Simulation" in out
    assert "SIMULATION SUMMARY" in out
