import pytest

from massspring.exceptions import InvalidParameterError
from massspring.model.physics import PhysicalParameters
from massspring.model.state import DisplayConfig, ParameterStore


def test_defaults():
    store = ParameterStore()
    assert store.params == PhysicalParameters(mass=2.0, stiffness=50.0, amplitude=1.5, phase=0.0)
    assert store.display == DisplayConfig(show_vectors=True, show_circular_motion=False, show_energy=False)


def test_partial_update_emits(qtbot):
    store = ParameterStore()
    with qtbot.waitSignal(store.parameters_changed) as blocker:
        store.update(mass=4.0)

    assert store.params.mass == 4.0
    assert store.params.stiffness == 50.0
    assert blocker.args == [store.params]


@pytest.mark.parametrize("changes", [
    {"mass": 0.0},
    {"mass": -2.0},
    {"stiffness": 0.0},
    {"amplitude": -1.0},
    {"phase": float("nan")},
    {"gravity": 9.81},
])
def test_rejected_update_keeps_previous(qtbot, changes):
    store = ParameterStore()
    store.update(mass=3.0)
    before = store.params

    with qtbot.assertNotEmitted(store.parameters_changed):
        with pytest.raises(InvalidParameterError):
            store.update(**changes)

    assert store.params is before


def test_no_signal_without_change(qtbot):
    store = ParameterStore()
    with qtbot.assertNotEmitted(store.parameters_changed):
        store.update(mass=2.0)


def test_invalid_initial_params():
    with pytest.raises(InvalidParameterError):
        ParameterStore(PhysicalParameters(mass=-1.0))


def test_display_toggles(qtbot):
    store = ParameterStore()
    with qtbot.waitSignal(store.display_changed):
        store.set_display(show_energy=True, show_vectors=False)

    assert store.display.show_energy
    assert not store.display.show_vectors

    with pytest.raises(KeyError):
        store.set_display(show_grid=True)


def test_reset(qtbot):
    store = ParameterStore()
    store.update(amplitude=2.5, phase=1.0)
    store.set_display(show_circular_motion=True)

    with qtbot.waitSignals([store.parameters_changed, store.display_changed]):
        store.reset()

    assert store.params == PhysicalParameters()
    assert store.display == DisplayConfig()
