"""Tests for busy-file polling with backoff."""

from pathlib import Path

from cursor_setup.core.busy import BusyTimeout, FileBusy, FileFree, check_file, wait_for_release
from cursor_setup.gateway.system.fake import FakeSystem
from cursor_setup.gateway.time.fake import FakeTime

ARTIFACT = Path("/home/u/.AppImage/cursor-1.5.6.AppImage")


def test_check_file_reports_holders() -> None:
    assert check_file(FakeSystem(open_pids=[42]), ARTIFACT) == FileBusy(path=ARTIFACT, pids=(42,))
    assert check_file(FakeSystem(), ARTIFACT) == FileFree(path=ARTIFACT)


def test_free_file_does_not_sleep() -> None:
    time = FakeTime()

    result = wait_for_release(
        FakeSystem(), time, ARTIFACT, attempts=5, initial_delay=1.0, max_delay=8.0
    )

    assert isinstance(result, FileFree)
    assert time.sleep_calls == []


def test_backoff_doubles_and_caps() -> None:
    time = FakeTime()
    system = FakeSystem(open_pids=[42, 7])

    result = wait_for_release(system, time, ARTIFACT, attempts=5, initial_delay=1.0, max_delay=4.0)

    assert result == BusyTimeout(path=ARTIFACT, pids=(7, 42), attempts=5)
    assert time.sleep_calls == [1.0, 2.0, 4.0, 4.0, 4.0]
    assert len(system.open_file_checks) == 6


def test_release_during_polling() -> None:
    time = FakeTime()
    system = FakeSystem(open_pids=[42], release_after_checks=2)

    result = wait_for_release(system, time, ARTIFACT, attempts=5, initial_delay=1.0, max_delay=8.0)

    assert isinstance(result, FileFree)
    assert time.sleep_calls == [1.0, 2.0]
