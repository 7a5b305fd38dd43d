import pytest

from chip8vm.decoder import (
    UNKNOWN,
    addr12,
    decode,
    high8,
    imm8,
    lsb,
    msb,
    nibble,
    nth_bit,
)


def test_nibble_counts_from_most_significant() -> None:
    assert [nibble(0xABCD, position) for position in (1, 2, 3, 4)] == [0xA, 0xB, 0xC, 0xD]


def test_field_extractors() -> None:
    assert addr12(0x1ABC) == 0x0ABC
    assert imm8(0x6A42) == 0x42
    assert high8(0x6A42) == 0x6A


def test_bit_helpers() -> None:
    assert lsb(0b10000001) == 1
    assert lsb(0b10000000) == 0
    assert msb(0b10000000) == 1
    assert msb(0b01111111) == 0
    assert [nth_bit(0b10100000, position) for position in range(3)] == [1, 0, 1]


def test_decode_extracts_all_operands() -> None:
    instruction = decode(0xD12F)
    assert instruction.mnemonic == 'DRAW'
    assert instruction.word == 0xD12F
    assert (instruction.x, instruction.y, instruction.n) == (0x1, 0x2, 0xF)
    assert instruction.nn == 0x2F
    assert instruction.nnn == 0x12F


@pytest.mark.parametrize(
    "word, mnemonic",
    [
        (0x00E0, 'CLS'),
        (0x00EE, 'RET'),
        (0x1234, 'JUMP'),
        (0x2345, 'CALL'),
        (0x3A01, 'SKE'),
        (0x4A01, 'SKNE'),
        (0x5AB0, 'SKRE'),
        (0x6A01, 'LOAD'),
        (0x7A01, 'ADD'),
        (0x8AB0, 'MOVE'),
        (0x8AB4, 'ADDR'),
        (0x8AB7, 'SUBN'),
        (0x8ABE, 'SHL'),
        (0x9AB0, 'SKRNE'),
        (0xA123, 'LOADI'),
        (0xB123, 'JUMPI'),
        (0xCAFF, 'RAND'),
        (0xEA9E, 'SKPR'),
        (0xEAA1, 'SKUP'),
        (0xFA0A, 'KEYD'),
        (0xFA1E, 'ADDI'),
        (0xFA65, 'READ'),
    ],
)
def test_decode_mnemonics(word, mnemonic) -> None:
    assert decode(word).mnemonic == mnemonic


@pytest.mark.parametrize("word", [0x0000, 0x0123, 0x5001, 0x9AB1, 0x8AB8, 0xEA00, 0xFA99])
def test_decode_unknown_words(word) -> None:
    assert decode(word).mnemonic == UNKNOWN
