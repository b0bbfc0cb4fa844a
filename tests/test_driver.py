import math

import pytest

from massspring.controller.driver import SimulationDriver
from massspring.controller.scheduler import QtFrameScheduler
from massspring.exceptions import InvalidParameterError
from massspring.model.physics import evaluate
from massspring.model.state import ParameterStore


@pytest.fixture
def store(example_params, qapp):
    return ParameterStore(example_params)


@pytest.fixture
def driver(store, manual_scheduler):
    return SimulationDriver(store, scheduler=manual_scheduler)


def test_scheduler_registered_only_while_running(driver, manual_scheduler):
    assert not manual_scheduler.is_active

    driver.play()
    assert manual_scheduler.is_active
    assert driver.is_running

    driver.pause()
    assert not manual_scheduler.is_active
    assert not driver.is_running


def test_play_twice_registers_once(driver, manual_scheduler):
    driver.play()
    driver.play()
    assert manual_scheduler.start_calls == 1


def test_tick_sequence_emits_frames(qtbot, driver, manual_scheduler):
    driver.play()
    with qtbot.assertNotEmitted(driver.frame_ready):
        manual_scheduler.fire(2.0)
    assert driver.sim_time == 0.0

    with qtbot.waitSignal(driver.frame_ready) as blocker:
        manual_scheduler.fire(2.1)

    assert driver.sim_time == pytest.approx(0.1)
    assert len(driver.history) == 1
    assert blocker.args[0].sim_time == pytest.approx(0.1)


def test_speed_two(driver, manual_scheduler):
    driver.set_playback_speed(2.0)
    driver.play()
    manual_scheduler.fire(0.0)
    manual_scheduler.fire(0.1)
    assert driver.sim_time == pytest.approx(0.2)


def test_invalid_speed_rejected(driver):
    with pytest.raises(InvalidParameterError):
        driver.set_playback_speed(0.0)
    assert driver.playback_speed == 1.0


def test_step_stops_and_cancels(qtbot, driver, manual_scheduler):
    driver.play()
    manual_scheduler.fire(0.0)

    with qtbot.waitSignals([driver.running_changed, driver.frame_ready]):
        driver.step()
    driver.step()

    assert driver.sim_time == pytest.approx(0.10)
    assert not driver.is_running
    assert not manual_scheduler.is_active


def test_reset(qtbot, driver, manual_scheduler):
    driver.play()
    manual_scheduler.fire(0.0)
    manual_scheduler.fire(0.5)

    with qtbot.waitSignal(driver.frame_ready) as blocker:
        driver.reset()

    assert driver.sim_time == 0.0
    assert not driver.is_running
    assert len(driver.history) == 0
    assert not manual_scheduler.is_active
    assert blocker.args[0].sim_time == 0.0


def test_parameter_change_while_running(qtbot, driver, store, manual_scheduler):
    driver.play()
    manual_scheduler.fire(0.0)
    manual_scheduler.fire(0.2)
    before = driver.history_snapshot()

    with qtbot.waitSignal(driver.frame_ready) as blocker:
        driver.set_parameters(amplitude=0.5)

    # Neither time nor history is reset
    assert driver.sim_time == pytest.approx(0.2)
    assert driver.history_snapshot() == before
    assert driver.is_running
    assert blocker.args[0] == evaluate(driver.sim_time, store.params)

    manual_scheduler.fire(0.3)
    assert driver.history.latest() == evaluate(driver.sim_time, store.params)


def test_rejected_parameters_keep_previous(driver, store):
    before = store.params
    with pytest.raises(InvalidParameterError):
        driver.set_parameters(mass=0.0)
    assert store.params is before
    assert driver.angular_frequency() == pytest.approx(5.0)


def test_derived_quantities(driver):
    assert driver.angular_frequency() == pytest.approx(5.0)
    assert driver.period() == pytest.approx(2 * math.pi / 5)
    driver.set_parameters(mass=0.5)
    assert driver.angular_frequency() == pytest.approx(10.0)


def test_shutdown_while_running(qtbot, driver, manual_scheduler):
    driver.play()
    with qtbot.waitSignal(driver.running_changed) as blocker:
        driver.shutdown()

    assert blocker.args == [False]
    assert not manual_scheduler.is_active
    assert not driver.is_running

    # Idempotent, and further transport is refused
    driver.shutdown()
    driver.play()
    assert not manual_scheduler.is_active
    assert driver.tick(10.0) is None


def test_shutdown_disconnects_from_store(qtbot, driver, store):
    driver.shutdown()
    with qtbot.assertNotEmitted(driver.frame_ready):
        store.update(mass=3.0)


def test_qt_scheduler_start_stop(qapp):
    scheduler = QtFrameScheduler(interval_ms=5)
    received = []

    scheduler.start(received.append)
    scheduler.start(received.append)
    assert scheduler.is_active

    scheduler.stop()
    scheduler.stop()
    assert not scheduler.is_active


def test_qt_scheduler_delivers_monotonic_seconds(qtbot):
    scheduler = QtFrameScheduler(interval_ms=5)
    received = []
    scheduler.start(received.append)

    qtbot.waitUntil(lambda: len(received) >= 3, timeout=2000)
    scheduler.stop()

    assert received == sorted(received)
    assert all(t >= 0 for t in received)


def test_qt_scheduler_set_fps(qapp):
    scheduler = QtFrameScheduler()
    scheduler.set_fps(50)
    assert scheduler.interval_ms == 20
    scheduler.set_fps(0)
    assert scheduler.interval_ms == 20


def test_driver_with_real_timer_advances(qtbot, store):
    driver = SimulationDriver(store)
    driver.play()
    qtbot.waitUntil(lambda: len(driver.history) >= 2, timeout=3000)
    driver.shutdown()

    assert driver.sim_time > 0
    times = [s.sim_time for s in driver.history]
    assert times == sorted(times)


@pytest.mark.parametrize("delta", [0.0, -0.05, float("nan")])
def test_invalid_step_keeps_running(qtbot, driver, manual_scheduler, delta):
    driver.play()
    manual_scheduler.fire(0.0)
    manual_scheduler.fire(0.1)

    with qtbot.assertNotEmitted(driver.running_changed):
        with pytest.raises(InvalidParameterError):
            driver.step(delta)

    assert driver.is_running
    assert manual_scheduler.is_active == driver.is_running
    assert driver.sim_time == pytest.approx(0.1)

    # Ticks keep arriving after the rejected step
    manual_scheduler.fire(0.2)
    assert driver.sim_time == pytest.approx(0.2)
