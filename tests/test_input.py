from polygraph.input import (
    CursorMoved,
    ElementState,
    Input,
    InputSystem,
    MouseButton,
    MouseButtonEvent,
    MouseInput,
    MouseWheel,
)
from polygraph.vecmath import Vec2


def test_press_sets_pressed_and_just_pressed():
    inp = Input()
    inp.press("a")
    assert inp.pressed("a")
    assert inp.just_pressed("a")
    assert not inp.just_released("a")


def test_update_clears_transitions_but_keeps_held():
    inp = Input()
    inp.press("a")
    inp.update()
    assert inp.pressed("a")
    assert not inp.just_pressed("a")


def test_release_clears_pressed():
    inp = Input()
    inp.press("a")
    inp.release("a")
    assert not inp.pressed("a")
    assert inp.just_released("a")
    inp.update()
    assert not inp.just_released("a")


def test_release_without_press_is_tolerated():
    inp = Input()
    inp.release("b")
    assert inp.just_released("b")
    assert not inp.pressed("b")


def test_first_cursor_move_has_zero_delta():
    mouse = MouseInput()
    assert mouse.position is None
    mouse.on_cursor_move(Vec2(10.0, 20.0))
    assert mouse.cursor_delta == Vec2.ZERO
    assert mouse.position == Vec2(10.0, 20.0)


def test_second_cursor_move_gives_delta():
    mouse = MouseInput()
    mouse.on_cursor_move(Vec2.ZERO)
    mouse.on_cursor_move(Vec2(3.0, 4.0))
    assert mouse.cursor_delta == Vec2(3.0, 4.0)


def test_update_resets_deltas_but_keeps_position():
    mouse = MouseInput()
    mouse.on_cursor_move(Vec2.ZERO)
    mouse.on_cursor_move(Vec2(1.0, 1.0))
    mouse.on_wheel_scroll(2.5)
    mouse.update()
    assert mouse.cursor_delta == Vec2.ZERO
    assert mouse.wheel_delta == 0.0
    assert mouse.position == Vec2(1.0, 1.0)


def test_button_events_route_to_buttons():
    mouse = MouseInput()
    mouse.on_button_event(MouseButton.LEFT, ElementState.PRESSED)
    assert mouse.buttons.pressed(MouseButton.LEFT)
    assert not mouse.buttons.pressed(MouseButton.RIGHT)
    mouse.on_button_event(MouseButton.LEFT, ElementState.RELEASED)
    assert not mouse.buttons.pressed(MouseButton.LEFT)
    assert mouse.buttons.just_released(MouseButton.LEFT)


def test_input_system_dispatches_events():
    system = InputSystem()
    system.on_window_event(CursorMoved(Vec2(5.0, 6.0)))
    system.on_window_event(MouseWheel(1.5))
    system.on_window_event(MouseButtonEvent(MouseButton.MIDDLE, ElementState.PRESSED))
    assert system.mouse.position == Vec2(5.0, 6.0)
    assert system.mouse.wheel_delta == 1.5
    assert system.mouse.buttons.pressed(MouseButton.MIDDLE)


def test_input_system_ignores_unknown_events_and_updates():
    system = InputSystem()
    system.on_window_event(MouseWheel(-1.0))
    system.on_window_event("resize")
    assert system.mouse.wheel_delta == -1.0
    system.update()
    assert system.mouse.wheel_delta == 0.0