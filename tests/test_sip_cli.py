import json

from sipcalc.utils.sip_cli import run

QUIET = ["--log_level", "ERROR"]


def test_project_json(capsys):
    rc = run(QUIET + ["project", "--monthly", "5000", "--years", "10", "--rate", "12", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert out["maturity_amount"] == 1150193
    assert len(out["yearly_breakdown"]) == 10


def test_project_text_with_step_up(capsys):
    rc = run(QUIET + ["project", "--monthly", "1000", "--years", "3", "--rate", "0", "--step_up", "10", "--inflation", "0"])
    text = capsys.readouterr().out
    assert rc == 0
    assert "Total invested:     39720" in text
    assert "invested" in text


def test_goal_text(capsys):
    rc = run(QUIET + ["goal", "--target", "1000000", "--years", "10", "--rate", "12", "--current", "3000"])
    text = capsys.readouterr().out
    assert rc == 0
    assert "Required monthly SIP: 4304" in text
    assert "Monthly shortfall:    1304" in text


def test_goal_degenerate_exit_code(capsys):
    rc = run(QUIET + ["goal", "--target", "1000", "--years", "0", "--rate", "12", "--json"])
    assert rc == 2


def test_scenarios_json(capsys):
    rc = run(QUIET + ["scenarios", "--monthly", "5000", "--years", "10", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert len(out["outcomes"]) >= 1


def test_deflate_json(capsys):
    rc = run(QUIET + ["deflate", "--amount", "1000000", "--years", "10", "--inflation", "6", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert round(out["real_value"]) == 558395


def test_report_from_payload_file(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({
        "plan": {"monthlyAmount": 5000, "duration": 10, "expectedReturn": 12},
        "goal": {"targetAmount": 1000000},
    }), encoding="utf-8")
    rc = run(QUIET + ["report", "--payload", str(payload)])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert out["goal"]["required_contribution"] == 4304


def test_invalid_report_payload_exit_code(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({"plan": {"monthlyAmount": 5000}}), encoding="utf-8")
    rc = run(QUIET + ["report", "--payload", str(payload)])
    assert rc == 1
    assert "Invalid input" in capsys.readouterr().err


def test_report_non_numeric_inflation_exit_code(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({
        "plan": {"monthlyAmount": 5000, "duration": 10, "expectedReturn": 12},
        "goal": {"targetAmount": 1000000},
        "inflationRate": "six",
    }), encoding="utf-8")
    rc = run(QUIET + ["report", "--payload", str(payload)])
    assert rc == 1
    assert "Invalid input" in capsys.readouterr().err


def test_report_degenerate_goal_exit_code(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({
        "plan": {"monthlyAmount": 5000, "duration": 0, "expectedReturn": 12},
        "goal": {"targetAmount": 1000000},
    }), encoding="utf-8")
    rc = run(QUIET + ["report", "--payload", str(payload)])
    captured = capsys.readouterr()
    assert rc == 2
    assert "ERROR: required_contribution is not finite" in captured.err
