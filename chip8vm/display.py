import logging

logger = logging.getLogger(__name__)

# The size of the Chip 8 frame buffer in pixels
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# The number of keys on the Chip 8 keypad (0 - F)
NUM_KEYS = 0x10


class Display(object):
    """
    The frame buffer and keypad that the CPU talks to. This class keeps all
    of the state in memory and touches no devices, so it can be used on its
    own for headless runs and tests. Subclasses add a real window, sound and
    keyboard (see screen.Screen).

    Pixels are stored as 0 (off) or 1 (on), row by row starting at the top
    left of the screen.

    Two methods are hooks for subclasses: draw_screen_pixel() is told about
    every pixel change, and next_key() must be overridden by any display
    used with a CPU in blocking_key_wait mode. The base next_key() has no
    key source and raises NotImplementedError.
    """
    def __init__(self, width=DISPLAY_WIDTH, height=DISPLAY_HEIGHT):
        self.screen_width = width
        self.screen_height = height
        self.screen_pixels = bytearray(width * height)
        self.keys_pressed = [False] * NUM_KEYS
        self.buzz_count = 0

    def clear_screen(self):
        """
        Turns off all the pixels on the screen.
        """
        for index in range(len(self.screen_pixels)):
            self.screen_pixels[index] = 0

    def get_screen_pixel(self, x_axis_position, y_axis_position):
        """
        Returns whether the pixel is on (1) or off (0) at the specified
        location. Coordinates wrap around the edges of the screen.

        :param x_axis_position: the x coordinate to check
        :param y_axis_position: the y coordinate to check
        :return: the color of the specified pixel (0 or 1)
        """
        x_axis_position %= self.screen_width
        y_axis_position %= self.screen_height
        return self.screen_pixels[y_axis_position * self.screen_width + x_axis_position]

    def set_screen_pixel(self, x_axis_position, y_axis_position, value):
        """
        XORs the pixel at the specified location with value. Coordinates wrap
        around the edges of the screen.

        :param x_axis_position: the x coordinate of the pixel
        :param y_axis_position: the y coordinate of the pixel
        :param value: 1 to flip the pixel, 0 to leave it alone
        :return: True if the pixel went from on to off
        """
        x_axis_position %= self.screen_width
        y_axis_position %= self.screen_height
        index = y_axis_position * self.screen_width + x_axis_position
        old_color = self.screen_pixels[index]
        new_color = old_color ^ (1 if value else 0)
        self.screen_pixels[index] = new_color
        if new_color != old_color:
            self.draw_screen_pixel(x_axis_position, y_axis_position, new_color)
        return old_color == 1 and new_color == 0

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Hook called whenever a pixel changes color. Does nothing here.
        """

    def is_key_pressed(self, key):
        """
        :param key: the keypad key to check (only the low nibble is used)
        :return: True if the key is currently held down
        """
        return self.keys_pressed[key & 0xF]

    def press_key(self, key):
        logger.debug("Key %X pressed", key)
        self.keys_pressed[key & 0xF] = True

    def release_key(self, key):
        logger.debug("Key %X released", key)
        self.keys_pressed[key & 0xF] = False

    def next_key(self):
        """
        Blocks until a keypad key is pressed, and returns it. A headless
        display has no source of key presses to wait on.
        """
        raise NotImplementedError("{} cannot wait for key presses".format(type(self).__name__))

    def buzz(self):
        """
        Emits one audible pulse. The headless display only counts them.
        """
        self.buzz_count += 1
        logger.debug("Buzz")
