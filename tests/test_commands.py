"""Tests for key and line command bindings."""

import pytest

from rsvp_reader.playback.commands import (
    COMMANDS,
    KEY_BINDINGS,
    LINE_COMMANDS,
    dispatch,
    resolve,
)
from rsvp_reader.playback.state import PlaybackStatus


class TestTables:
    """Every binding points at a registered command."""

    @pytest.mark.parametrize("table", [KEY_BINDINGS, LINE_COMMANDS])
    def test_every_binding_names_a_command(self, table):
        assert set(table.values()) <= set(COMMANDS)

    @pytest.mark.parametrize("table", [KEY_BINDINGS, LINE_COMMANDS])
    def test_every_command_is_reachable(self, table):
        assert set(table.values()) == set(COMMANDS)


class TestResolve:
    """resolve() maps raw input to a command name."""

    def test_space_key(self):
        assert resolve(" ", KEY_BINDINGS) == "toggle"

    def test_case_insensitive(self):
        assert resolve("RIGHT", KEY_BINDINGS) == "next_sentence"
        assert resolve("R", LINE_COMMANDS) == "restart"

    def test_surrounding_whitespace_ignored(self):
        assert resolve("  +  ", LINE_COMMANDS) == "faster"

    def test_empty_line_toggles(self):
        assert resolve("", LINE_COMMANDS) == "toggle"

    def test_unknown(self):
        assert resolve("x", KEY_BINDINGS) is None


class TestDispatch:
    """dispatch() runs the bound controller method."""

    def test_toggle_starts_and_stops(self, make_controller):
        controller = make_controller()
        assert dispatch(controller, " ") == "toggle"
        assert controller.status == PlaybackStatus.PLAYING
        dispatch(controller, "space")
        assert controller.status == PlaybackStatus.PAUSED

    def test_arrow_keys_jump_sentences(self, make_controller):
        controller = make_controller()
        dispatch(controller, "right")
        assert controller.current_index == 2
        dispatch(controller, "left")
        assert controller.current_index == 2
        controller.set_index(3)
        dispatch(controller, "left")
        assert controller.current_index == 2

    def test_up_down_step_rate(self, make_controller):
        controller = make_controller()
        dispatch(controller, "up")
        assert controller.rate_wpm == 350
        dispatch(controller, "down")
        dispatch(controller, "down")
        assert controller.rate_wpm == 250

    def test_restart(self, make_controller):
        controller = make_controller(resume_position=3)
        dispatch(controller, "r")
        assert controller.current_index == 0

    def test_line_commands(self, make_controller):
        controller = make_controller()
        dispatch(controller, ">", LINE_COMMANDS)
        dispatch(controller, "+", LINE_COMMANDS)
        assert controller.current_index == 2
        assert controller.rate_wpm == 350

    def test_unknown_input_leaves_controller_untouched(self, make_controller):
        controller = make_controller()
        assert dispatch(controller, "z") is None
        assert controller.current_index == 0
        assert controller.status == PlaybackStatus.PAUSED
