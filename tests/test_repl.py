import builtins
from collections.abc import Callable, Iterable
from unittest.mock import patch

import pytest

import void.void_repl
from void.void_evaluator import Session
from void.void_object import Value
from void.void_repl import brace_delta, print_traceback, read_unit, start_repl


def feed(
    monkeypatch: pytest.MonkeyPatch, lines: Iterable[str], prompts: list[str] | None = None
) -> None:
    it = iter(lines)

    def fake_input(prompt: str) -> str:
        if prompts is not None:
            prompts.append(prompt)
        return next(it)

    monkeypatch.setattr(builtins, "input", fake_input)


def raising(exc: BaseException) -> Callable[[str], str]:
    def fake_input(_: str) -> str:
        raise exc

    return fake_input


def test_repl_exit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "Void REPL. Type 'exit' to leave." in out
    assert "Exiting Void REPL." in out


@pytest.mark.parametrize("exc", [EOFError(), KeyboardInterrupt()])
def test_repl_eof_and_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], exc: BaseException
) -> None:
    monkeypatch.setattr(builtins, "input", raising(exc))
    start_repl()
    assert "Exiting Void REPL." in capsys.readouterr().out


def test_repl_evaluates_and_keeps_bindings(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["let x = 2", "x * 3", "exit"])
    start_repl()
    lines = capsys.readouterr().out.splitlines()
    assert lines[1:3] == ["null", "6"]


def test_repl_uses_given_session(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    session = Session()
    session.evaluate("let greeting = \"hi\";")
    feed(monkeypatch, ["greeting", "let y = 1", "exit"])
    start_repl(session)
    assert "hi" in capsys.readouterr().out.splitlines()
    assert "y" in session.env


def test_repl_empty_input_skipped(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["", "   ", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert out.splitlines() == ["Void REPL. Type 'exit' to leave.", "Exiting Void REPL."]


def test_repl_prints_errors_and_continues(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["nope", "let = 1", "1 + 1", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "<error: identifier not found: nope>" in out
    assert (
        "<error: expected next token to be `IDENT`, got `ASSIGN` instead at literal `=`>"
        in out
    )
    assert "2" in out.splitlines()


def test_repl_continues_open_braces(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    prompts: list[str] = []
    feed(monkeypatch, ["let f = fn(x) {", "  x + 1", "};", "f(41)", "exit"], prompts)
    start_repl()
    assert prompts == [">> ", ".. ", ".. ", ">> ", ">> "]
    assert capsys.readouterr().out.splitlines()[1:3] == ["null", "42"]


def test_exit_inside_open_block_is_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["if (true) {", "exit", "}", "exit"])
    start_repl()
    assert "<error: identifier not found: exit>" in capsys.readouterr().out


def test_repl_prompt_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOID_PROMPT", "void> ")
    prompts: list[str] = []
    feed(monkeypatch, ["1", "exit"], prompts)
    start_repl()
    assert prompts == ["void> ", "void> "]


def test_repl_verbose_mode_toggle(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["verbose-mode", "1 + 2 * 3", "verbose-mode", "4", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Verbose mode ON" in out
    assert "[ast] >>> (1 + (2 * 3))" in out
    assert "7" in out.splitlines()
    assert "[mode] >>> Verbose mode OFF" in out
    assert "[ast] >>> 4" not in out


def test_repl_verbose_skips_tree_on_parse_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["1 +", "exit"])
    start_repl(verbose=True)
    out = capsys.readouterr().out
    assert "[ast]" not in out
    assert "<error: no `prefix parse function` found for `EOF`>" in out


def test_repl_prints_traceback_on_exception(monkeypatch: pytest.MonkeyPatch) -> None:
    class ExplodingSession(Session):
        def evaluate(self, source: str) -> Value:
            raise RuntimeError("boom")

    feed(monkeypatch, ["1", "exit"])
    with patch("builtins.print") as mock_print:
        start_repl(ExplodingSession())

    output = "\n".join(
        "".join(str(arg) for arg in call.args) for call in mock_print.call_args_list
    ).lower()
    assert "[error] >>>" in output
    assert "runtimeerror" in output
    assert "boom" in output
    assert "exiting void repl" in output


def test_print_traceback_outputs_error() -> None:
    with patch("builtins.print") as mock_print:
        try:
            raise ValueError("intentional test error")
        except Exception:
            print_traceback()

    printed = [
        "".join(str(arg) for arg in call.args) for call in mock_print.call_args_list
    ]
    joined = "\n".join(printed).lower()

    assert "[error] >>>" in joined
    assert "valueerror" in joined
    assert "intentional test error" in joined


def test_read_unit(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, ["fn() {", "{", "}}", "exit"])
    assert read_unit(">> ") == "fn() {\n{\n}}"
    assert read_unit(">> ") is None


def test_read_unit_ignores_braces_in_strings(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, ['puts("{")', 'fn() { "}" ', "}"])
    assert read_unit(">> ") == 'puts("{")'
    assert read_unit(">> ") == 'fn() { "}" \n}'


@pytest.mark.parametrize(
    "line,delta",
    [
        ("fn() {", 1),
        ("}}", -2),
        ('"{"', 0),
        ('let s = "}" + "{{"; {', 1),
        ("", 0),
    ],
)
def test_brace_delta(line: str, delta: int) -> None:
    assert brace_delta(line) == delta


def test_repl_evaluates_brace_in_string(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ['puts("{")', "exit"])
    start_repl()
    assert "<puts: {>" in capsys.readouterr().out


def test_read_unit_stops_when_braces_close_early(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, ["}", "x"])
    assert read_unit(">> ") == "}"


def test_main_starts_repl(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["exit"])
    void.void_repl.main()
    assert "Exiting Void REPL." in capsys.readouterr().out
