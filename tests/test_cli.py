"""Tests for the command line."""

import json

import pytest

from newmethod import cli


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated settings directory with one template and a project."""
    monkeypatch.setenv("NEWMETHOD_HOME", str(tmp_path / "home"))
    templates = tmp_path / "root" / "template"
    templates.mkdir(parents=True)
    (templates / "log.go.tmpl").write_text("// [[METHODNAME]] [[PARAMETERS]]", encoding="utf-8")
    (templates / "method.tmpl").write_text("func [[REPLACE]] {}\n", encoding="utf-8")
    project = tmp_path / "project"
    project.mkdir()
    (project / "log.go").write_text("package p", encoding="utf-8")
    (project / "svc.go").write_text("package p\n\n", encoding="utf-8")

    config = tmp_path / "home" / "settings.json"
    config.parent.mkdir()
    config.write_text(json.dumps({
        "rootDirectory": str(tmp_path / "root"),
        "templateNames": "log.go",
        "methodTemplate": "method.tmpl",
    }), encoding="utf-8")
    return tmp_path


class TestCreate:
    def test_full_pipeline(self, home, capsys):
        svc = home / "project" / "svc.go"
        cli.main(["create", "-s", "Get(id string) error", "--file", str(svc), "--line", "2"])

        assert svc.read_text(encoding="utf-8") == "package p\nGet(id string) error\nfunc Get(id string) error {}\n"
        assert (home / "project" / "log.go").read_text(encoding="utf-8") == "package p\n// Get id"
        out = capsys.readouterr().out
        assert f"inserted: {svc}" in out
        assert "wrote: " in out

    def test_no_insert_quiet(self, home, capsys):
        svc = home / "project" / "svc.go"
        cli.main(["create", "-s", "Get()", "--file", str(svc), "--no-insert", "-q"])
        assert svc.read_text(encoding="utf-8") == "package p\n\n"
        assert capsys.readouterr().out == ""

    def test_no_file(self, home, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["create", "-s", "Get()"])
        assert exc.value.code == 1
        assert "no selected file" in capsys.readouterr().err

    def test_missing_template_reported(self, home, capsys):
        svc = home / "project" / "svc.go"
        with pytest.raises(SystemExit):
            cli.main(["create", "-s", "Get()", "--file", str(svc), "--templates", "nope.go"])
        assert "nope.go.tmpl" in capsys.readouterr().err

    def test_undecodable_target_reported(self, home, capsys):
        svc = home / "project" / "svc.go"
        (home / "project" / "log.go").write_bytes(b"\xff\xfe bad")
        with pytest.raises(SystemExit) as exc:
            cli.main(["create", "-s", "Get()", "--file", str(svc), "--no-insert"])
        assert exc.value.code == 1
        assert "cannot decode file" in capsys.readouterr().err

    def test_cancelled_is_silent(self, home, capsys, monkeypatch):
        monkeypatch.setattr(cli, "_signature_prompt", lambda args: (lambda: None))
        with pytest.raises(SystemExit) as exc:
            cli.main(["create", "--file", str(home / "project" / "svc.go")])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == "" and captured.err == ""


def test_inspect(home, capsys):
    cli.main(["inspect", "Foo(a string, b int) (int, error) `tag`"])
    out = capsys.readouterr().out.splitlines()
    assert "name: Foo" in out
    assert "parameter: a string" in out
    assert "return: error" in out
    assert "notation: tag`" in out
    assert "[[NAMEDRETURN]]: (i int, e error)" in out
    assert "[[PARAMETERS]]: a, b" in out


def test_templates(home, capsys):
    cli.main(["templates", "--templates", "log.go,other.go"])
    out = capsys.readouterr().out
    assert "log.go  ok" in out
    assert "other.go  missing" in out
    assert "(cursor) method.tmpl  ok" in out


def test_init(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("NEWMETHOD_HOME", str(tmp_path))
    cli.main(["init"])
    data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
    assert data["templateDirectory"] == "template"
    with pytest.raises(SystemExit):
        cli.main(["init"])


class TestExec:
    def test_processes_and_archives(self, home, capsys):
        queue = home / "home" / "queue"
        queue.mkdir()
        (queue / "1.json").write_text(json.dumps({
            "signature": "Put(k string)",
            "file": str(home / "project" / "svc.go"),
            "insert": False,
        }), encoding="utf-8")
        (queue / "2.json").write_text(json.dumps({"signature": ""}), encoding="utf-8")
        (queue / "3.json").write_text("[]", encoding="utf-8")

        cli.main(["exec"])

        assert (home / "project" / "log.go").read_text(encoding="utf-8") == "package p\n// Put k"
        archive = home / "home" / "archive"
        assert sorted(p.name for p in archive.iterdir()) == [
            "1.json.done", "2.json.cancelled", "3.json.invalid",
        ]
        assert "processed 3 request(s)" in capsys.readouterr().out

    def test_failed_request(self, home, capsys):
        queue = home / "home" / "queue"
        queue.mkdir()
        (queue / "1.json").write_text(json.dumps({"signature": "Put()"}), encoding="utf-8")

        outcomes = cli.process_queue(cli._load_settings(cli.build_parser().parse_args(["exec"])))
        assert list(outcomes.values()) == ["failed"]
        assert "no selected file" in capsys.readouterr().err

    def test_undecodable_file_is_archived_failed(self, home, capsys):
        queue = home / "home" / "queue"
        queue.mkdir()
        svc = home / "project" / "svc.go"
        svc.write_bytes(b"\xff\xfe bad")
        (queue / "1.json").write_text(json.dumps({"signature": "Put()", "file": str(svc)}), encoding="utf-8")

        cli.main(["exec"])

        assert (home / "home" / "archive" / "1.json.failed").exists()
        assert not (queue / "1.json").exists()
        assert "cannot decode file" in capsys.readouterr().err

    def test_empty_queue(self, home, capsys):
        cli.main(["exec"])
        assert "no queued requests" in capsys.readouterr().out


def test_no_command(capsys):
    cli.main([])
    assert "usage" in capsys.readouterr().out
