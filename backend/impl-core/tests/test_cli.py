import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import cli
import compiler


@pytest.fixture
def src(tmp_path):
    root = tmp_path / "src"
    (root / "demo").mkdir(parents=True)
    (root / "demo" / "Sized.java").write_text(
        "package demo; public interface Sized { int size(); }", encoding="utf-8"
    )
    (root / "demo" / "Done.java").write_text(
        "package demo; public final class Done { }", encoding="utf-8"
    )
    (root / "demo" / "Broken.java").write_text("class Broken {", encoding="utf-8")
    return root


def test_source_mode_writes_implementation(src, tmp_path, capsys):
    out = tmp_path / "out"
    code = cli.main(["-sp", str(src), "demo.Sized", str(out)])

    assert code == 0
    assert (out / "demo" / "SizedImpl.java").exists()
    captured = capsys.readouterr()
    assert "SizedImpl.java" in captured.out
    # the invalid file is reported, the rest still loads
    assert "Broken.java" in captured.err


def test_unknown_type_is_reported(src, tmp_path, capsys):
    code = cli.main(["-sp", str(src), "demo.Nope", str(tmp_path / "out")])

    assert code == 1
    assert "Failed to implement class given" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_unsupported_type_is_reported(src, tmp_path, capsys):
    code = cli.main(["-sp", str(src), "demo.Done", str(tmp_path / "out")])

    assert code == 2
    assert "final classes cannot be extended" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_invalid_output_path_is_reported(src, capsys):
    code = cli.main(["-sp", str(src), "demo.Sized", "  "])

    assert code == 1
    assert "Failed to create path for output file" in capsys.readouterr().err


def test_jar_mode_reports_missing_compiler(src, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(compiler, "find_javac", lambda: None)
    code = cli.main(["-jar", "-sp", str(src), "demo.Sized", str(tmp_path / "sized.jar")])

    assert code == 2
    assert "Can not find java compiler" in capsys.readouterr().err
    assert not (tmp_path / "sized.jar").exists()


def test_wrong_argument_count_exits():
    with pytest.raises(SystemExit):
        cli.main(["demo.Sized"])
