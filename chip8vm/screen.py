import array
import logging

import pygame
from pygame import display, mixer, HWSURFACE, DOUBLEBUF, Color, draw

from chip8vm.display import Display, DISPLAY_HEIGHT, DISPLAY_WIDTH
from chip8vm.exception import DisplayClosedException

logger = logging.getLogger(__name__)

SCREEN_NAME = 'CHIP8 Emulator'

# The depth of the screen is the number of bits used to represent the color
# of a pixel.
SCREEN_DEPTH = 8

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}

# Sets which keys on the keyboard map to the Chip 8 keys
#
#  Keypad       Keyboard
#  1 2 3 C      1 2 3 4
#  4 5 6 D      Q W E R
#  7 8 9 E      A S D F
#  A 0 B F      Z X C V
KEY_MAPPINGS = {
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_4: 0xC,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_r: 0xD,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_f: 0xE,
    pygame.K_z: 0xA,
    pygame.K_x: 0x0,
    pygame.K_c: 0xB,
    pygame.K_v: 0xF,
}

# Buzzer tone settings
BUZZ_FREQUENCY = 440
BUZZ_DURATION = 1.0 / 60
BUZZ_VOLUME = 0.2
SAMPLE_RATE = 44100


def make_buzz_samples(frequency=BUZZ_FREQUENCY, duration=BUZZ_DURATION,
                      volume=BUZZ_VOLUME, sample_rate=SAMPLE_RATE):
    """
    Builds a signed 16-bit square wave.

    :return: an array.array of samples
    """
    samples = array.array('h')
    amplitude = int(32767 * volume)
    half_period = max(1, sample_rate // (2 * frequency))
    level = amplitude
    for count in range(int(duration * sample_rate)):
        if count and count % half_period == 0:
            level = -level
        samples.append(level)
    return samples


class Screen(Display):
    """
    A class to emulate a Chip 8 Screen. The original Chip 8 screen was 64 x 32
    with 2 colors. In this emulator, this translates to color 0 (off) and color
    1 (on). The frame buffer itself lives in Display; this class mirrors it
    onto a pygame window, plays the buzzer and reads the keyboard.
    """
    def __init__(self, ratio, screen_height=DISPLAY_HEIGHT, screen_width=DISPLAY_WIDTH):
        """
        Initializes the main screen. The scale factor is used to modify
        the size of the main screen, since the original resolution of the
        Chip 8 was 64 x 32, which is quite small.

        :param ratio: the scaling factor to apply to the screen
        :param screen_height: the height of the screen
        :param screen_width: the width of the screen
        """
        Display.__init__(self, width=screen_width, height=screen_height)
        self.scaling_ratio = ratio
        self.screen_surface = None
        self.buzz_sound = None
        self.screen_dirty = False

    def init_display(self):
        """
        Attempts to initialize a screen with the specified height and width.
        The screen will by default be of depth SCREEN_DEPTH, and will be
        double-buffered in hardware (if possible). A missing audio device
        only disables the buzzer.
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)),
            HWSURFACE | DOUBLEBUF,
            SCREEN_DEPTH)
        display.set_caption(SCREEN_NAME)
        self.screen_surface.fill(PIXEL_COLORS[0])
        display.flip()
        self.init_sound()

    def init_sound(self):
        try:
            mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
            mixer.init()
        except pygame.error as error:
            logger.warning("Sound disabled: %s", error)
            return
        self.buzz_sound = mixer.Sound(buffer=make_buzz_samples().tobytes())

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Paint a pixel on the window surface. Note that the pixel will not
        automatically be drawn on the screen, you must call update_screen()
        to flip the drawing buffer to the display. The coordinate system
        starts with (0, 0) being in the top left of the screen.

        :param x_axis_position: the x coordinate to place the pixel
        :param y_axis_position: the y coordinate to place the pixel
        :param pixel_color: the color of the pixel to draw
        """
        x_axis_base_position = x_axis_position * self.scaling_ratio
        y_axis_base_position = y_axis_position * self.scaling_ratio
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[pixel_color],
                  (x_axis_base_position, y_axis_base_position, self.scaling_ratio, self.scaling_ratio))
        self.screen_dirty = True

    def clear_screen(self):
        """
        Turns off all the pixels on the screen (writes color 0 to all pixels).
        """
        Display.clear_screen(self)
        self.screen_surface.fill(PIXEL_COLORS[0])
        self.screen_dirty = True

    def update_screen(self):
        """
        Updates the display by swapping the back buffer and screen buffer, if
        anything was drawn since the last update. According to the pygame
        documentation, the flip should wait for a vertical retrace when both
        HWSURFACE and DOUBLEBUF are set on the surface.
        """
        if self.screen_dirty:
            display.flip()
            self.screen_dirty = False

    def handle_key_event(self, event):
        """
        Track the keypad state for a pygame KEYDOWN or KEYUP event.

        :param event: the pygame event
        :return: the keypad key that went down, or None
        """
        if event.key not in KEY_MAPPINGS:
            return None
        keypad_key = KEY_MAPPINGS[event.key]
        if event.type == pygame.KEYDOWN:
            self.press_key(keypad_key)
            return keypad_key
        self.release_key(keypad_key)
        return None

    def next_key(self):
        """
        Blocks until a key that maps onto the keypad is pressed. Other events
        that arrive while waiting are dropped. A QUIT is put back on the queue
        for the main loop and ends the wait with DisplayClosedException.

        :return: the keypad key (0 - F)
        """
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                pygame.event.post(event)
                raise DisplayClosedException()
            if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                keypad_key = self.handle_key_event(event)
                if keypad_key is not None:
                    return keypad_key

    def buzz(self):
        Display.buzz(self)
        if self.buzz_sound is not None:
            self.buzz_sound.play()
