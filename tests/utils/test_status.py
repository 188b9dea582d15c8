import enum

import pytest

from typedconf.utils.status import Status, StatusError


class State(enum.Flag):
    READY = 0
    ERROR = 1
    INFO = 2
    MESSAGE = 4


class Plain(enum.Enum):
    A = 1


def test_requires_flag_enum():
    with pytest.raises(StatusError):
        Status(Plain)
    with pytest.raises(StatusError):
        Status(int)


def test_starts_at_zero_flag():
    status = Status(State)
    assert status.flags == State.READY
    assert status == State.READY


def test_set_and_clear_raise_change_events():
    status = Status(State)
    seen = []
    status.on_changed(lambda sender, flags: seen.append(flags.value))

    status += State.ERROR
    status += State.MESSAGE
    status -= State.ERROR
    status -= State.MESSAGE

    assert seen == [1, 5, 4, 0]
    assert status == State.READY


def test_no_event_without_change():
    status = Status(State, State.INFO)
    seen = []
    status.on_changed(lambda sender, flags: seen.append(flags))

    status += State.INFO
    status -= State.ERROR
    status.assign(State.INFO)

    assert seen == []


def test_equality_tests_bits():
    status = Status(State, State.ERROR | State.INFO)
    assert status == State.ERROR
    assert status == State.ERROR | State.INFO
    assert status != State.MESSAGE
    assert status != State.READY
    assert State.INFO in status
    assert State.MESSAGE not in status


def test_status_to_status_comparison_is_exact():
    assert Status(State, State.ERROR) == Status(State, State.ERROR)
    assert Status(State, State.ERROR | State.INFO) != Status(State, State.ERROR)


def test_rejects_flags_of_another_type():
    status = Status(State)
    with pytest.raises(StatusError):
        status.set(Plain.A)


def test_remove_listener():
    status = Status(State)
    seen = []

    def listener(sender, flags):
        seen.append(flags)

    status.on_changed(listener)
    status.set(State.INFO)
    status.remove_listener(listener)
    status.clear(State.INFO)

    assert seen == [State.INFO]
