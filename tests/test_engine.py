"""
Tests for the execution engine.

Tests verify that the engine correctly:
    - Passes input through with auto-print
    - Applies addressed and unaddressed commands
    - Ends the cycle on delete without auto-printing
    - Keeps state across cycles
"""

import logging

import pytest
from lsed.config import EditorConfig
from lsed.cursor import Cursor
from lsed.engine import (
    HANDLERS,
    CycleControl,
    ExecutionState,
    StreamEditor,
    execute,
    run_cycle,
    selects,
)
from lsed.model import Address, Command, Function, Script
from lsed.parser import ScriptError, compile_script


class TestSelects:
    """Test the address matcher."""

    def test_no_address_selects_every_line(self):
        assert all(selects(None, n) for n in range(1, 5))

    def test_exact_line(self):
        assert selects(Address(2), 2)
        assert not selects(Address(2), 1)
        assert not selects(Address(2), 3)

    def test_line_zero_never_selects(self):
        assert not any(selects(Address(0), n) for n in range(1, 5))


@pytest.mark.parametrize("input_text,script,expected", [
    ("input", "", "input\n"),
    ("input", "d", ""),
    ("input", " ;\td", ""),
    ("line1\nline2\nline3", "2d", "line1\nline3\n"),
    ("line1\nline2\nline3", "2 \td", "line1\nline3\n"),
    ("line1\nline2\nline3\nline4\n", "2d; 3d", "line1\nline4\n"),
    ("line1\nline2\nline3", "=", "1\nline1\n2\nline2\n3\nline3\n"),
    ("line1\nline2\nline3", "2=", "line1\n2\nline2\nline3\n"),
    ("line1\nline2\nline3\n", "1p", "line1\nline1\nline2\nline3\n"),
])
def test_execute(input_text, script, expected):
    assert execute(input_text, script) == expected


class TestExecute:
    """Further execute() behavior."""

    def test_empty_input(self):
        assert execute("", "=") == ""
        assert execute("", "p") == ""

    def test_blank_lines_are_cycles(self):
        assert execute("a\n\nb\n", "=") == "1\na\n2\n\n3\nb\n"

    def test_delete_stops_later_commands(self):
        assert execute("a\nb", "2d; 2=; p") == "a\na\n"

    def test_commands_before_delete_still_run(self):
        assert execute("a\nb", "=; 1d") == "1\n2\nb\n"

    def test_print_then_print_line_number(self):
        assert execute("a", "p;=;p") == "a\n1\na\na\n"

    def test_unselected_address(self):
        assert execute("a\nb", "5d") == "a\nb\n"

    def test_accepts_compiled_script(self):
        script = compile_script("1d")
        assert execute("a\nb", script) == "b\n"

    def test_lenient_runs_compiled_prefix(self):
        assert execute("a\nb", "1d; x; 2d") == "b\n"

    def test_strict_raises(self):
        with pytest.raises(ScriptError):
            execute("a\nb", "1d; x", strict=True)

    def test_config_strict(self):
        with pytest.raises(ScriptError):
            execute("a", "x", config=EditorConfig(strict=True))

    def test_strict_rejects_leniently_compiled_script(self):
        """A precompiled script that stopped early is still an error when strict."""
        script = compile_script("1d; x")
        with pytest.raises(ScriptError) as exc_info:
            execute("a", script, strict=True)
        assert exc_info.value.position == 4
        assert exc_info.value.found == "x"

    def test_config_strict_rejects_leniently_compiled_script(self):
        with pytest.raises(ScriptError, match="missing function"):
            execute("a", compile_script("1p; 5"), config=EditorConfig(strict=True))

    def test_strict_accepts_complete_precompiled_script(self):
        assert execute("a\nb", compile_script("1d"), strict=True) == "b\n"

    def test_keyword_overrides_config(self):
        assert execute("a", "x", strict=False, config=EditorConfig(strict=True)) == "a\n"


class TestRunCycle:
    """Test single cycles against an explicit state."""

    def test_cycle_updates_state(self):
        state = ExecutionState()
        cursor = Cursor("one\ntwo")
        control = run_cycle(compile_script("="), state, cursor)

        assert control is CycleControl.CONTINUE
        assert state.line_number == 1
        assert state.pattern_space == "one"
        assert state.output_lines == ["1", "one"]
        assert cursor.remaining() == "two"

    def test_delete_ends_cycle(self):
        state = ExecutionState()
        control = run_cycle(compile_script("d"), state, Cursor("one"))

        assert control is CycleControl.END_CYCLE
        assert state.pattern_space == ""
        assert state.output == ""

    def test_hold_space_survives_cycles(self):
        state = ExecutionState(hold_space="kept")
        cursor = Cursor("a\nb")
        script = compile_script("p")
        run_cycle(script, state, cursor)
        run_cycle(script, state, cursor)
        assert state.hold_space == "kept"
        assert state.line_number == 2

    def test_unset_function_is_ignored(self):
        script = Script(commands=(Command(), Command(Function.PRINT_LINE_NUMBER)))
        assert execute("a", script) == "1\na\n"

    def test_every_function_has_handler(self):
        assert set(HANDLERS) == set(Function)


class TestStreamEditor:
    """Test the editor object."""

    def test_fresh_state_per_editor(self):
        script = compile_script("=")
        first = StreamEditor(script)
        second = StreamEditor(script)
        first.run("a\nb")
        assert second.state.line_number == 0
        assert second.run("c") == "1\nc\n"

    def test_run_again_continues_numbering(self):
        editor = StreamEditor(compile_script("="))
        editor.run("a\n")
        assert editor.run("b\n") == "1\na\n2\nb\n"
        assert editor.output == "1\na\n2\nb\n"

    def test_trace_logs_each_cycle(self, caplog):
        editor = StreamEditor(compile_script("2d"), trace=True)
        with caplog.at_level(logging.DEBUG, logger="lsed.engine"):
            editor.run("line1\nline2")
        messages = [r.getMessage() for r in caplog.records if r.name == "lsed.engine"]
        assert messages == [
            "Processing line 1: 'line1'",
            "Processing line 2: 'line2'",
        ]

    def test_trace_shows_line_before_delete_clears_it(self, caplog):
        """A deleted line is traced as read, not as the emptied pattern space."""
        state = ExecutionState()
        with caplog.at_level(logging.DEBUG, logger="lsed.engine"):
            run_cycle(compile_script("d"), state, Cursor("gone"), trace=True)
        assert state.pattern_space == ""
        assert "Processing line 1: 'gone'" in caplog.text

    def test_no_trace_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lsed.engine"):
            StreamEditor(compile_script("p")).run("a")
        assert not [r for r in caplog.records if r.name == "lsed.engine"]
