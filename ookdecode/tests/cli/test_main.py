from __future__ import annotations

import json
from pathlib import Path

import pytest

import ookdecode.cli.main as main_mod
import ookdecode.cli.commands as cmd_mod


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(main_mod, "configure_logging", lambda cfg: None)


def test_decode_prints_records(capsys):
    rc = main_mod.main(["decode", "de7044af0a81cc", "45003fd102a2360040c04701a193ab"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out[0].startswith("Acurite-Tower -> ")
    assert out[1].startswith("Fineoffset-WH45 -> ")


def test_decode_json(capsys):
    rc = main_mod.main(["decode", "--json", "--no-raw", "80002d980000950a764005bc0a003fff973a"])
    obj = json.loads(capsys.readouterr().out)

    assert rc == 0
    assert obj["model"] == "Fineoffset-WS80"
    assert obj["wind_dir_deg"] == 188
    assert "raw_bytes" not in obj


def test_decode_drops_unsupported_by_default(capsys):
    main_mod.main(["decode", "12000500000000"])
    assert capsys.readouterr().out == ""

    main_mod.main(["decode", "--show-unsupported", "12000500000000"])
    assert "DECODE_FAIL_UNSUPPORTED" in capsys.readouterr().out


def test_file_command(tmp_path: Path, capsys):
    p = tmp_path / "capture.txt"
    p.write_text("# captured\nde7044af0a81cc\n\nnot-hex\n", encoding="utf-8")

    rc = main_mod.main(["file", str(p)])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert len(out) == 1
    assert out[0].startswith("Acurite-Tower")


def test_file_missing_returns_error(tmp_path: Path, capsys):
    rc = main_mod.main(["file", str(tmp_path / "nope.txt")])
    assert rc == 1
    assert "ERROR: Input file not found" in capsys.readouterr().out


def test_classify_command(capsys):
    rc = main_mod.main(["classify", "de7044af0a81cc", "12000500", "abc"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out[0] == "de7044af0a81cc -> Tower"
    assert out[1] == "12000500 -> Unsupported"
    assert out[2].startswith("abc -> invalid")


def test_listen_without_port_returns_error(capsys):
    rc = main_mod.main(["listen"])
    out = capsys.readouterr().out

    assert rc == 1
    assert "ERROR: No receiver port configured" in out
    assert "Hint:" in out


def test_listen_reads_from_receiver(monkeypatch, capsys):
    lines = ["de7044af0a81cc", ""]

    class FakeLink:
        def __init__(self, port, baudrate, timeout):
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return None

        def readline(self):
            if lines:
                return lines.pop(0)
            raise KeyboardInterrupt

    monkeypatch.setattr(cmd_mod, "ReceiverLink", FakeLink)

    rc = main_mod.main(["listen", "--port", "/dev/ttyUSB0"])
    out = capsys.readouterr().out

    assert rc == 0
    assert "Listening on /dev/ttyUSB0" in out
    assert "Acurite-Tower -> " in out
    assert "Stopped." in out


def test_config_file_is_applied(tmp_path: Path, capsys):
    cfg = tmp_path / "ookdecode.yml"
    cfg.write_text("output: {format: json}\n", encoding="utf-8")

    rc = main_mod.main(["--config", str(cfg), "decode", "de7044af0a81cc"])

    assert rc == 0
    assert json.loads(capsys.readouterr().out)["channel"] == "A"


def test_bad_config_returns_error(tmp_path: Path, capsys):
    cfg = tmp_path / "ookdecode.yml"
    cfg.write_text("output: {format: xml}\n", encoding="utf-8")

    rc = main_mod.main(["--config", str(cfg), "decode", "de7044af0a81cc"])
    out = capsys.readouterr().out

    assert rc == 1
    assert "ERROR: Unknown output format 'xml'" in out


def test_configure_file_logging_is_idempotent(tmp_path: Path):
    import logging

    root = logging.getLogger()
    before = list(root.handlers)
    try:
        cmd_mod.configure_file_logging(tmp_path / "logs" / "app.log")
        cmd_mod.configure_file_logging(tmp_path / "logs" / "app.log")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()
