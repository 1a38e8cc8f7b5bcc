import main
from Relay.Events.event_dispatcher import EventDispatcher


def test_trace_reports_firing_order():
    disp = EventDispatcher()
    results = main.trace(disp, ["user.*.created", "user.**"], ["user.42.created", "user.42.updated", "other"])
    assert results == [["user.**", "user.*.created"], ["user.**"], []]


def test_trace_sequential_mode():
    disp = EventDispatcher()
    results = main.trace(disp, ["a.**", "a.*"], ["a.b"], mode="sequential")
    assert results == [["a.**", "a.*"]]


def test_main_prints_results(capsys, monkeypatch, tmp_path):
    for key in ("RELAY_DELIMITER", "RELAY_WILDCARD", "RELAY_SEPARATOR"):
        monkeypatch.delenv(key, raising=False)
    code = main.main([
        "--env-file", str(tmp_path / "none.env"),
        "--mode", "parallel",
        "-p", "a/+", "--delimiter", "/", "--wildcard", "+",
        "a/b", "c",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "a/b: a/+" in out
    assert "c: (no listeners)" in out


def test_main_config_error(capsys, monkeypatch, tmp_path):
    monkeypatch.delenv("RELAY_DELIMITER", raising=False)
    monkeypatch.delenv("RELAY_WILDCARD", raising=False)
    code = main.main(["--env-file", str(tmp_path / "none.env"), "--wildcard", "a.b", "x"])
    assert code == 1
    assert "Error:" in capsys.readouterr().out
