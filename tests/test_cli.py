import io

import pytest

from skibidi_cli import EXIT_FATAL, EXIT_OK, EXIT_SYNTAX, main

PROGRAM = """
skibidi main {
    flex (int i = 0; i < 3; i = i + 1) {
        yap(i);
    }
    yell("done");
}
"""


@pytest.fixture
def src(tmp_path):
    def write(text, name="prog.skb"):
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return str(p)
    return write


def test_runs_file(src, capsys):
    assert main([src(PROGRAM)]) == EXIT_OK
    out, err = capsys.readouterr()
    assert out == "0\n1\n2\n"
    assert err == "done\n"


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('skibidi main { yap("hi"); }'))
    assert main([]) == EXIT_OK
    assert capsys.readouterr().out == "hi\n"


def test_undefined_variable_exits_nonzero(src, capsys):
    code = main([src("skibidi main { yap(1); yap(z); yap(2); }")])
    out, err = capsys.readouterr()
    assert code == EXIT_FATAL
    assert out == "1\n"
    assert "Error: Undefined variable 'z'" in err


def test_division_by_zero(src, capsys):
    assert main([src("skibidi main { yap(1 / 0); }")]) == EXIT_FATAL
    assert "Division by zero" in capsys.readouterr().err


def test_break_outside_switch(src, capsys):
    assert main([src("skibidi main { break; yap(1); }")]) == EXIT_FATAL
    out, err = capsys.readouterr()
    assert out == ""
    assert "'break' outside of a switch" in err


def test_syntax_error(src, capsys):
    assert main([src("skibidi main { yap(1) }")]) == EXIT_SYNTAX
    err = capsys.readouterr().err
    assert err.startswith("Error: Unexpected token '}'")
    assert "^" in err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.skb")]) == EXIT_SYNTAX
    assert "cannot read" in capsys.readouterr().err


def test_recoverable_error_continues(src, capsys):
    assert main([src('skibidi main { yap("a" + 1); yap(2); }')]) == EXIT_OK
    out, err = capsys.readouterr()
    assert out == "1\n2\n"
    assert "Cannot evaluate a string literal" in err


def test_strict_escalates(src, capsys):
    assert main(["--strict", src('skibidi main { yap("a" + 1); yap(2); }')]) == EXIT_FATAL
    out, err = capsys.readouterr()
    assert out == ""
    assert "Cannot evaluate a string literal" in err


def test_max_vars(src, capsys):
    code = main(["--max-vars", "1", "--dump-vars", src("skibidi main { a = 1; b = 2; yap(b = 3); }")])
    out, err = capsys.readouterr()
    assert code == EXIT_OK
    assert out == "3\n"
    assert "cannot store 'b'" in err
    assert "a = 1" in err


def test_switch_mode(src, capsys):
    program = src("""
        skibidi main {
            switch (2) {
                case 1: yap(1);
                default: yap(9);
                case 2: yap(2);
            }
        }
    """)
    assert main([program]) == EXIT_OK
    assert capsys.readouterr().out == "9\n"
    assert main(["--switch-mode", "conventional", program]) == EXIT_OK
    assert capsys.readouterr().out == "2\n"


def test_summary(src, capsys):
    assert main(["--summary", src(PROGRAM)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "ForStatement" in out
    assert "ErrorStatement" in out


def test_parse_tree(src, capsys):
    assert main(["--parse-tree", src(PROGRAM)]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("start")
    assert "for_stmt" in out


def test_source_not_utf8(tmp_path, capsys):
    p = tmp_path / "bad.skb"
    p.write_bytes(b'skibidi main { yap("\xff"); }')
    assert main([str(p)]) == EXIT_SYNTAX
    err = capsys.readouterr().err
    assert err.startswith(f"Error: cannot read {p}: not valid UTF-8")


@pytest.mark.parametrize("value", ["-1", "lots"])
def test_max_vars_must_be_non_negative_int(src, capsys, value):
    with pytest.raises(SystemExit) as exc:
        main(["--max-vars", value, src(PROGRAM)])
    assert exc.value.code == 2
    assert "--max-vars" in capsys.readouterr().err


def test_long_operator_chain(src, capsys):
    assert main([src("skibidi main { yap(" + " + ".join(["1"] * 1000) + "); }")]) == EXIT_OK
    assert capsys.readouterr().out == "1000\n"


def test_deep_nesting_is_reported(src, capsys):
    depth = 2000
    program = "skibidi main { " + "if (1) { " * depth + "yap(1); " + "} " * depth + "}"
    assert main([src(program)]) == EXIT_FATAL
    out, err = capsys.readouterr()
    assert out == ""
    assert "Error: program nests too deeply" in err
