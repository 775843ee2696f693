"""Per-frame tracking of mouse buttons, cursor movement and wheel scrolling."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Generic, Hashable, TypeVar

from polygraph.vecmath import Vec2


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()


class ElementState(Enum):
    PRESSED = auto()
    RELEASED = auto()


@dataclass(frozen=True)
class CursorMoved:
    """The cursor moved to a new window position."""

    position: Vec2


@dataclass(frozen=True)
class MouseWheel:
    """The mouse wheel scrolled by a vertical amount (lines or pixels)."""

    delta: float


@dataclass(frozen=True)
class MouseButtonEvent:
    """A mouse button was pressed or released."""

    button: MouseButton
    state: ElementState


WindowEvent = CursorMoved | MouseWheel | MouseButtonEvent

B = TypeVar("B", bound=Hashable)


class Input(Generic[B]):
    """Held, just-pressed and just-released state for a set of buttons."""

    def __init__(self) -> None:
        self._pressed: set[B] = set()
        self._just_pressed: set[B] = set()
        self._just_released: set[B] = set()

    def press(self, button: B) -> None:
        self._pressed.add(button)
        self._just_pressed.add(button)

    def release(self, button: B) -> None:
        self._pressed.discard(button)
        self._just_released.add(button)

    def pressed(self, button: B) -> bool:
        return button in self._pressed

    def just_pressed(self, button: B) -> bool:
        return button in self._just_pressed

    def just_released(self, button: B) -> bool:
        return button in self._just_released

    def update(self) -> None:
        """Forget this frame's press and release transitions."""
        self._just_pressed.clear()
        self._just_released.clear()


class MouseInput:
    """Mouse state: buttons, last position, per-frame cursor and wheel deltas."""

    def __init__(self) -> None:
        self._buttons: Input[MouseButton] = Input()
        self._last_pos: Vec2 | None = None
        self._delta = Vec2.ZERO
        self._wheel_delta = 0.0

    def on_cursor_move(self, position: Vec2) -> None:
        last = self._last_pos if self._last_pos is not None else position
        self._delta = position - last
        self._last_pos = position

    def on_button_event(self, button: MouseButton, state: ElementState) -> None:
        match state:
            case ElementState.PRESSED:
                self._buttons.press(button)
            case ElementState.RELEASED:
                self._buttons.release(button)

    def on_wheel_scroll(self, delta: float) -> None:
        self._wheel_delta = delta

    def update(self) -> None:
        """Reset the per-frame deltas."""
        self._delta = Vec2.ZERO
        self._wheel_delta = 0.0

    @property
    def buttons(self) -> Input[MouseButton]:
        return self._buttons

    @property
    def position(self) -> Vec2 | None:
        return self._last_pos

    @property
    def cursor_delta(self) -> Vec2:
        return self._delta

    @property
    def wheel_delta(self) -> float:
        return self._wheel_delta


@dataclass
class InputSystem:
    """Collects window events into input state."""

    mouse: MouseInput = field(default_factory=MouseInput)

    def update(self) -> None:
        """Called every frame to reset per-frame input data."""
        self.mouse.update()

    def on_window_event(self, event: object) -> None:
        """Feed a window event; events that are not input are ignored."""
        match event:
            case CursorMoved(position=position):
                self.mouse.on_cursor_move(position)
            case MouseWheel(delta=delta):
                self.mouse.on_wheel_scroll(float(delta))
            case MouseButtonEvent(button=button, state=state):
                self.mouse.on_button_event(button, state)
            case _:
                pass