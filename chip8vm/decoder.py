"""
Instruction decoding for the Chip 8. Every instruction is a 16-bit word
stored big-endian in memory, conventionally described as four nibbles:

   Bits:  15-12    11-8      7-4      3-0
          family    x         y        n

The helpers below pull individual fields out of a word. decode() turns a
word into an Instruction, which is what the CPU executes.
"""
from collections import namedtuple

# Masks for the various fields of an instruction word
FAMILY_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
BYTE_MASK = 0x00FF
HIGH_BYTE_MASK = 0xFF00
ADDRESS_MASK = 0x0FFF

# Name used for words that do not match any known instruction
UNKNOWN = 'UNKNOWN'

Instruction = namedtuple('Instruction', ['mnemonic', 'word', 'x', 'y', 'n', 'nn', 'nnn'])


def nibble(word, position):
    """
    Returns the nth 4-bit group of the word, counting from the most
    significant. Given 0xABCD, position 1 is A and position 4 is D.

    :param word: the 16-bit instruction word
    :param position: 1 to 4
    :return: the nibble value (0 - 15)
    """
    shift = 4 * (4 - position)
    return (word >> shift) & 0xF


def addr12(word):
    return word & ADDRESS_MASK


def imm8(word):
    return word & BYTE_MASK


def high8(word):
    return (word & HIGH_BYTE_MASK) >> 8


def lsb(value):
    return value & 0x1


def msb(value):
    return (value & 0x80) >> 7


def nth_bit(value, position):
    """
    Treats the byte as an array of bits where position 0 is the most
    significant bit, and returns the bit at the position.
    """
    return (value >> (7 - position)) & 0x1


# Instructions whose mnemonic depends only on the top nibble
FAMILY_LOOKUP = {
    0x1: 'JUMP',     # 1nnn - JUMP nnn
    0x2: 'CALL',     # 2nnn - CALL nnn
    0x3: 'SKE',      # 3snn - SKE  Vs, nn
    0x4: 'SKNE',     # 4snn - SKNE Vs, nn
    0x6: 'LOAD',     # 6snn - LOAD Vs, nn
    0x7: 'ADD',      # 7snn - ADD  Vs, nn
    0xA: 'LOADI',    # Annn - LOAD I, nnn
    0xB: 'JUMPI',    # Bnnn - JUMP V0 + nnn
    0xC: 'RAND',     # Ctnn - RAND Vt, nn
    0xD: 'DRAW',     # Dstn - DRAW Vs, Vt, n
}

# 00nn instructions, keyed by the full word
SYSTEM_LOOKUP = {
    0x00E0: 'CLS',   # 00E0 - CLS
    0x00EE: 'RET',   # 00EE - RET
}

# Register to register comparisons, keyed by the top nibble. These are only
# defined when the bottom nibble is 0.
REGISTER_SKIP_LOOKUP = {
    0x5: 'SKRE',     # 5st0 - SKE  Vs, Vt
    0x9: 'SKRNE',    # 9st0 - SKNE Vs, Vt
}

# 8stn instructions, keyed by the bottom nibble
LOGICAL_LOOKUP = {
    0x0: 'MOVE',     # 8st0 - LOAD Vs, Vt
    0x1: 'OR',       # 8st1 - OR   Vs, Vt
    0x2: 'AND',      # 8st2 - AND  Vs, Vt
    0x3: 'XOR',      # 8st3 - XOR  Vs, Vt
    0x4: 'ADDR',     # 8st4 - ADD  Vs, Vt
    0x5: 'SUB',      # 8st5 - SUB  Vs, Vt
    0x6: 'SHR',      # 8s06 - SHR  Vs
    0x7: 'SUBN',     # 8st7 - SUBN Vs, Vt
    0xE: 'SHL',      # 8s0E - SHL  Vs
}

# Esnn instructions, keyed by the bottom byte
KEYBOARD_LOOKUP = {
    0x9E: 'SKPR',    # Es9E - SKPR Vs
    0xA1: 'SKUP',    # EsA1 - SKUP Vs
}

# Fsnn instructions, keyed by the bottom byte
MISC_LOOKUP = {
    0x07: 'MOVED',   # Ft07 - LOAD Vt, DELAY
    0x0A: 'KEYD',    # Ft0A - KEYD Vt
    0x15: 'LOADD',   # Fs15 - LOAD DELAY, Vs
    0x18: 'LOADS',   # Fs18 - LOAD SOUND, Vs
    0x1E: 'ADDI',    # Fs1E - ADD  I, Vs
    0x29: 'LDSPR',   # Fs29 - LOAD I, Vs
    0x33: 'BCD',     # Fs33 - BCD
    0x55: 'STOR',    # Fs55 - STOR [I], Vs
    0x65: 'READ',    # Fs65 - LOAD Vs, [I]
}


def decode_mnemonic(word):
    """
    Works out which instruction the word encodes.

    :param word: the 16-bit instruction word
    :return: the mnemonic, or UNKNOWN
    """
    family = nibble(word, 1)
    if family in FAMILY_LOOKUP:
        return FAMILY_LOOKUP[family]
    if family == 0x0:
        return SYSTEM_LOOKUP.get(word, UNKNOWN)
    if family in REGISTER_SKIP_LOOKUP:
        if nibble(word, 4) != 0:
            return UNKNOWN
        return REGISTER_SKIP_LOOKUP[family]
    if family == 0x8:
        return LOGICAL_LOOKUP.get(nibble(word, 4), UNKNOWN)
    if family == 0xE:
        return KEYBOARD_LOOKUP.get(imm8(word), UNKNOWN)
    return MISC_LOOKUP.get(imm8(word), UNKNOWN)


def decode(word):
    """
    Decodes a 16-bit word into an Instruction. All operand fields are
    extracted regardless of the instruction, so the executor can pick the
    ones it needs.

    :param word: the 16-bit instruction word
    :return: the decoded Instruction
    """
    return Instruction(
        mnemonic=decode_mnemonic(word),
        word=word,
        x=nibble(word, 2),
        y=nibble(word, 3),
        n=nibble(word, 4),
        nn=imm8(word),
        nnn=addr12(word),
    )
