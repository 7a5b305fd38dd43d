import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

pytest.importorskip("pygame")

from chip8vm.main import build_parser, main  # noqa: E402


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["pong.ch8"])
    assert args.rom == "pong.ch8"
    assert args.scale == 10
    assert args.op_delay == 1
    assert not args.strict
    assert args.seed is None
    assert not args.verbose


def test_parser_options() -> None:
    args = build_parser().parse_args(["-s", "4", "-d", "0", "--strict", "--seed", "7", "-v", "x.ch8"])
    assert (args.scale, args.op_delay, args.strict, args.seed, args.verbose) == (4, 0, True, 7, True)


def test_missing_rom_exits_with_error(tmp_path) -> None:
    assert main([str(tmp_path / "missing.ch8")]) == 1


def test_oversized_rom_exits_with_error(tmp_path) -> None:
    rom = tmp_path / "big.ch8"
    rom.write_bytes(b"\x00" * 4000)
    assert main([str(rom)]) == 1


def test_stack_underflow_stops_the_loop(tmp_path) -> None:
    rom = tmp_path / "ret.ch8"
    rom.write_bytes(b"\x00\xEE")
    assert main(["-d", "3", str(rom)]) == 1
