import pytest

from chip8vm.display import Display, DISPLAY_HEIGHT, DISPLAY_WIDTH


def test_set_pixel_reports_only_set_to_unset(screen) -> None:
    assert screen.set_screen_pixel(4, 4, 1) is False
    assert screen.get_screen_pixel(4, 4) == 1
    assert screen.set_screen_pixel(4, 4, 0) is False
    assert screen.get_screen_pixel(4, 4) == 1
    assert screen.set_screen_pixel(4, 4, 1) is True
    assert screen.get_screen_pixel(4, 4) == 0


def test_coordinates_wrap(screen) -> None:
    screen.set_screen_pixel(DISPLAY_WIDTH + 1, DISPLAY_HEIGHT + 2, 1)
    assert screen.get_screen_pixel(1, 2) == 1


def test_clear(screen) -> None:
    screen.set_screen_pixel(0, 0, 1)
    screen.set_screen_pixel(63, 31, 1)
    screen.clear_screen()
    assert not any(screen.screen_pixels)


def test_keypad_state(screen) -> None:
    assert not screen.is_key_pressed(0xF)
    screen.press_key(0xF)
    assert screen.is_key_pressed(0xF)
    screen.release_key(0xF)
    assert not screen.is_key_pressed(0xF)


def test_headless_display_cannot_wait_for_keys(screen) -> None:
    with pytest.raises(NotImplementedError):
        screen.next_key()


class RecordingDisplay(Display):
    def __init__(self):
        Display.__init__(self)
        self.drawn = []

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        self.drawn.append((x_axis_position, y_axis_position, pixel_color))


def test_draw_hook_sees_wrapped_changes() -> None:
    display = RecordingDisplay()
    display.set_screen_pixel(65, 1, 1)
    display.set_screen_pixel(1, 1, 0)
    display.set_screen_pixel(1, 1, 1)
    assert display.drawn == [(1, 1, 1), (1, 1, 0)]
