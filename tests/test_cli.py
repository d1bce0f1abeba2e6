from __future__ import annotations

import pytest
import yaml

from scriptdoc.cli import EXIT_NOT_FOUND, main


@pytest.fixture(autouse=True)
def _env(clean_env) -> None:
    pass


def test_doc_prints_block(greet_script, capsys) -> None:
    assert main(["doc", "fail", str(greet_script)]) == 0
    assert capsys.readouterr().out == "fail CODE\n"


def test_doc_missing_block_prints_nothing(greet_script, capsys) -> None:
    assert main(["doc", "nope", str(greet_script)]) == 0
    assert capsys.readouterr().out == ""


def test_topics(greet_script, capsys) -> None:
    assert main(["topics", str(greet_script)]) == 0
    assert capsys.readouterr().out == "fail\nhello\n"


def test_help_without_pager(greet_script, capsys) -> None:
    assert main(["--no-pager", "help", str(greet_script), "hello"]) == 0
    assert capsys.readouterr().out == "\nhello [NAME]\n\nPrint a greeting.\n"


def test_help_not_a_tty_skips_pager(greet_script, capsys) -> None:
    assert main(["help", str(greet_script)]) == 0
    assert "Available topics:" in capsys.readouterr().out


def test_exec_dispatches_command(greet_script, capsys) -> None:
    assert main(["exec", str(greet_script), "fail", "5"]) == 5


def test_exec_help(greet_script, capsys) -> None:
    assert main(["--no-pager", "exec", str(greet_script), "help", "fail"]) == 0
    assert capsys.readouterr().out == "fail CODE\n"


def test_exec_unknown_command(greet_script, capsys) -> None:
    assert main(["exec", str(greet_script), "nope"]) == EXIT_NOT_FOUND
    assert "Unknown command: nope" in capsys.readouterr().err


def test_missing_script(tmp_path, capsys) -> None:
    assert main(["help", str(tmp_path / "ghost")]) == EXIT_NOT_FOUND
    assert "command not found" in capsys.readouterr().err


def test_index_writes_yaml(greet_script, tmp_path) -> None:
    out = tmp_path / "docs" / "greet.yaml"
    assert main(["index", str(greet_script), "-o", str(out)]) == 0
    data = yaml.safe_load(out.read_text())
    assert data["script"] == "greet"
    assert sorted(data["blocks"]) == ["fail", "greet", "hello"]


def test_index_rejects_duplicates(make_script, capsys) -> None:
    path = make_script("dup", "# <doc:a>\n# </doc:a>\n# <doc:a>\n# </doc:a>\n")
    assert main(["index", str(path)]) == 1
    assert "more than once" in capsys.readouterr().err


def test_bad_config(tmp_path, greet_script, capsys) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("bogus: 1\n")
    assert main(["--config", str(cfg), "topics", str(greet_script)]) == 1
    assert "unknown config keys" in capsys.readouterr().err


JS_SOURCE = "// <doc:query.js>\n// query help\n// </doc:query.js>\n"


def test_exec_help_honours_prefix(make_script, capsys) -> None:
    path = make_script("query.js", JS_SOURCE)
    assert main(["--no-pager", "--prefix", "//", "help", str(path)]) == 0
    from_help = capsys.readouterr().out
    assert main(["--no-pager", "--prefix", "//", "exec", str(path)]) == 0
    assert capsys.readouterr().out == from_help == "query help\n"


def test_prefix_alias_for_dashes(make_script, capsys) -> None:
    path = make_script("report.sql", "-- <doc:run>\n-- run it\n-- </doc:run>\n")
    assert main(["--prefix", "dashes", "doc", "run", str(path)]) == 0
    assert capsys.readouterr().out == "run it\n"


def test_empty_prefix_rejected(greet_script, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--prefix=", "topics", str(greet_script)])
    assert exc.value.code == 2
    assert "must not be empty" in capsys.readouterr().err


def test_help_from_index_file(greet_script, tmp_path, capsys) -> None:
    out = tmp_path / "greet.yaml"
    assert main(["index", str(greet_script), "-o", str(out)]) == 0
    greet_script.write_text(greet_script.read_text().replace("fail CODE", "changed"))

    assert main(["--no-pager", "help", "--index", str(out), str(greet_script), "fail"]) == 0
    assert capsys.readouterr().out == "fail CODE\n"
    assert main(["--no-pager", "exec", "--index", str(out), str(greet_script), "help", "fail"]) == 0
    assert capsys.readouterr().out == "fail CODE\n"


def test_cli_logger_is_module_scoped() -> None:
    from scriptdoc import cli

    assert cli.logger.name == "scriptdoc.cli"
