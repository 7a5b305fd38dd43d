import argparse
import logging
import sys
import time

import pygame

from chip8vm.cpu import CPU
from chip8vm.exception import (
    DisplayClosedException,
    MachineFault,
    ProgramTooLargeException,
    UnknownOpCodeException,
)
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s]:  %(message)s"


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments. Each pass
    handles window events, lets the CPU catch up to the current time and
    flips the screen if anything was drawn. A key press that arrives while
    the CPU is waiting on Ft0A is handed straight to the CPU.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    project_screen = Screen(ratio=args.scale)
    project_screen.init_display()
    project_cpu = CPU(project_screen, strict=args.strict, seed=args.seed,
                      start_time=time.monotonic())
    try:
        project_cpu.cpu_load_rom(args.rom)
    except (IOError, ProgramTooLargeException) as error:
        logger.error("Cannot load %s: %s", args.rom, error)
        pygame.quit()
        return 1

    running = True
    status = 0
    while running:
        pygame.time.wait(args.op_delay)

        # Check for events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                keypad_key = project_screen.handle_key_event(event)
                if keypad_key is not None:
                    project_cpu.cpu_resume_with_key(keypad_key)

        try:
            project_cpu.cycle(time.monotonic())
        except DisplayClosedException:
            running = False
        except (MachineFault, UnknownOpCodeException) as error:
            logger.error("%s\n%s", error, project_cpu)
            running = False
            status = 1

        project_screen.update_screen()

    pygame.quit()
    return status


def build_parser():
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator")
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is 10)", type=int, default=10, dest="scale")
    parser.add_argument(
        "-d", help="sets each pass of the main loop to take at least "
                   "the specified number of milliseconds (default is 1)",
        type=int, default=1, dest="op_delay")
    parser.add_argument(
        "--strict", help="stop on unknown op-codes instead of skipping them",
        action="store_true")
    parser.add_argument(
        "--seed", help="seed for the random number generator", type=int, default=None)
    parser.add_argument(
        "-v", help="log every executed instruction", action="store_true", dest="verbose")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=LOG_FORMAT, stream=sys.stdout)
    return screen_cpu_connector(args)


if __name__ == "__main__":
    sys.exit(main())
