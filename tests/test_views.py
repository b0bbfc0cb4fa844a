import pytest

from massspring import config
from massspring.controller.driver import SimulationDriver
from massspring.main import build_parser
from massspring.model.state import ParameterStore
from massspring.view.main_window import MainWindow
from massspring.view.panels.control_panel import ControlPanel


@pytest.fixture
def driver(qapp, manual_scheduler):
    return SimulationDriver(ParameterStore(), scheduler=manual_scheduler)


def test_main_window_follows_frames(qtbot, driver, manual_scheduler):
    window = MainWindow(driver)
    qtbot.addWidget(window)

    driver.play()
    manual_scheduler.fire(0.0)
    manual_scheduler.fire(0.1)

    assert window.stats_panel.values["position"].text() == f"{driver.current_state().position:.2f} m"
    xs, _ys = window.charts.position_curve.getData()
    assert len(xs) == 1


def test_close_shuts_driver_down(qtbot, driver, manual_scheduler):
    window = MainWindow(driver)
    qtbot.addWidget(window)
    window.show()
    driver.play()

    window.close()

    assert not manual_scheduler.is_active
    assert not driver.is_running


def test_slider_updates_store(qtbot, driver):
    panel = ControlPanel(driver)
    qtbot.addWidget(panel)

    panel.sld_mass.slider.setValue(panel.sld_mass.slider.value() + 10)
    assert driver.store.params.mass == pytest.approx(3.0)


def test_play_button_toggles(qtbot, driver):
    panel = ControlPanel(driver)
    qtbot.addWidget(panel)

    panel.btn_play.click()
    assert driver.is_running
    assert panel.btn_play.text() == "Pause"

    panel.btn_step.click()
    assert not driver.is_running
    assert panel.btn_play.text() == "Play"
    assert driver.sim_time == pytest.approx(0.05)


def test_energy_toggle_shows_rows(qtbot, driver):
    window = MainWindow(driver)
    qtbot.addWidget(window)

    window.control_panel.chk_energy.setChecked(True)
    assert driver.store.display.show_energy
    assert window.stats_panel.values["total"].text() == "56.25 J"


def test_parser_rejects_non_positive_speed():
    parser = build_parser()
    assert parser.parse_args(["--speed", "2"]).speed == 2.0
    with pytest.raises(SystemExit):
        parser.parse_args(["--speed", "0"])


@pytest.mark.parametrize("text", ["10", "0.05", "nan", "fast"])
def test_parser_speed_limited_to_panel_range(text):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--speed", text])


def test_panel_shows_initial_speed(qtbot, manual_scheduler):
    _low, high, _step = config.PLAYBACK_SPEED_RANGE
    speed = build_parser().parse_args(["--speed", str(high)]).speed
    driver = SimulationDriver(ParameterStore(), scheduler=manual_scheduler, playback_speed=speed)
    panel = ControlPanel(driver)
    qtbot.addWidget(panel)

    assert panel.spin_speed.value() == pytest.approx(driver.playback_speed)


def test_reset_empties_charts(qtbot, driver, manual_scheduler):
    window = MainWindow(driver)
    qtbot.addWidget(window)
    driver.step()
    driver.step()

    driver.reset()

    xs, _ys = window.charts.position_curve.getData()
    assert xs is None or len(xs) == 0


def test_window_title_matches_app_name(qtbot, driver):
    window = MainWindow(driver)
    qtbot.addWidget(window)
    assert window.windowTitle() == config.VISIBLE_APP_NAME
