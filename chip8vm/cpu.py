import logging
import random
import time

from chip8vm.decoder import UNKNOWN, decode, lsb, msb, nth_bit
from chip8vm.exception import (
    MemoryAccessException,
    ProgramTooLargeException,
    StackOverflowException,
    StackUnderflowException,
    UnknownOpCodeException,
)

logger = logging.getLogger(__name__)

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# The largest program that fits between the program start and end of memory
MAX_PROGRAM_SIZE = MAX_MEMORY - PROGRAM_COUNTER_START

# The number of return addresses the call stack can hold
STACK_SIZE = 128

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# Instructions run at roughly 500Hz, the timers count down at 60Hz. Both
# periods are in seconds.
INSTRUCTION_PERIOD = 0.002
TIMER_PERIOD = 0.016666

# Each font glyph is 5 bytes long
FONT_SPRITE_SIZE = 5

# The hexadecimal digit glyphs, loaded at address 0
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# C L A S S E S ###############################################################


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    To summarize these sources, the Chip 8 has:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x 16-bit stack pointer (SP)
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the overflow bit

    The CPU is driven by calling cycle() in a loop. Each call looks at the
    time that has passed and runs at most one instruction and at most one
    timer tick. Everything the CPU needs from the outside world (pixels,
    keys, sound) goes through the display object it was given.
    """
    def __init__(self, screen, strict=False, seed=None, blocking_key_wait=False, start_time=0.0):
        """
        Initialize the Chip8 CPU.

        :param screen: the display.Display the CPU draws on and reads keys from
        :param strict: raise UnknownOpCodeException on unknown op-codes
            instead of skipping them
        :param seed: seed for the random number generator, None to seed it
            from the operating system
        :param blocking_key_wait: make Ft0A block on screen.next_key()
            instead of suspending the CPU until cpu_resume_with_key()
        :param start_time: the time (in seconds) both clocks start from
        """
        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. The timers are loaded with a value
        # and then decremented 60 times per second.
        self.cpu_timers = {
            'delay': 0,
            'sound': 0,
        }

        # Defines the general purpose, index, stack pointer and program
        # counter registers.
        self.cpu_registers = {
            'v': [],
            'index': 0,
            'sp': 0,
            'pc': 0,
        }

        # The operation lookup table is keyed by the mnemonic the decoder
        # assigns to each instruction
        self.cpu_operation_lookup = {
            'CLS': self.cpu_clear_screen,                     # 00E0
            'RET': self.cpu_return_from_subroutine,           # 00EE
            'JUMP': self.cpu_jump_to_address,                 # 1nnn
            'CALL': self.cpu_jump_to_subroutine,              # 2nnn
            'SKE': self.cpu_skip_if_reg_equal_val,            # 3snn
            'SKNE': self.cpu_skip_if_reg_not_equal_val,       # 4snn
            'SKRE': self.cpu_skip_if_reg_equal_reg,           # 5st0
            'LOAD': self.cpu_move_value_to_reg,               # 6snn
            'ADD': self.cpu_add_value_to_reg,                 # 7snn
            'MOVE': self.cpu_move_reg_into_reg,               # 8st0
            'OR': self.cpu_logical_or,                        # 8st1
            'AND': self.cpu_logical_and,                      # 8st2
            'XOR': self.cpu_exclusive_or,                     # 8st3
            'ADDR': self.cpu_add_reg_to_reg,                  # 8st4
            'SUB': self.cpu_subtract_reg_from_reg,            # 8st5
            'SHR': self.cpu_right_shift_reg,                  # 8s06
            'SUBN': self.cpu_subtract_reg_from_reg1,          # 8st7
            'SHL': self.cpu_left_shift_reg,                   # 8s0E
            'SKRNE': self.cpu_skip_if_reg_not_equal_reg,      # 9st0
            'LOADI': self.cpu_load_index_reg_with_value,      # Annn
            'JUMPI': self.cpu_jump_to_v0_plus_value,          # Bnnn
            'RAND': self.cpu_generate_random_number,          # Ctnn
            'DRAW': self.cpu_draw_sprite,                     # Dstn
            'SKPR': self.cpu_skip_if_key_pressed,             # Es9E
            'SKUP': self.cpu_skip_if_key_not_pressed,         # EsA1
            'MOVED': self.cpu_move_delay_timer_into_reg,      # Ft07
            'KEYD': self.cpu_wait_for_keypress,               # Ft0A
            'LOADD': self.cpu_move_reg_into_delay_timer,      # Fs15
            'LOADS': self.cpu_move_reg_into_sound_timer,      # Fs18
            'ADDI': self.cpu_add_reg_into_index,              # Fs1E
            'LDSPR': self.cpu_load_index_with_reg_sprite,     # Fs29
            'BCD': self.cpu_store_bcd_in_memory,              # Fs33
            'STOR': self.cpu_store_regs_in_memory,            # Fs55
            'READ': self.cpu_read_regs_from_memory,           # Fs65
        }
        self.cpu_operand = 0
        self.cpu_strict = strict
        self.cpu_blocking_key_wait = blocking_key_wait
        self.cpu_screen = screen
        self.cpu_random = random.Random(seed)
        self.cpu_memory = bytearray(MAX_MEMORY)
        self.cpu_memory[0:len(FONT_SET)] = FONT_SET
        self.cpu_stack = []
        self.cpu_awaiting_key = None
        self.cpu_reset(start_time)

    def __str__(self):
        val = 'PC: {:4X}  OP: {:4X}  SP: {:2X}\n'.format(
            self.cpu_registers['pc'], self.cpu_operand, self.cpu_registers['sp'])
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'I: {:4X}\n'.format(self.cpu_registers['index'])
        val += 'DT: {:2X}  ST: {:2X}'.format(self.cpu_timers['delay'], self.cpu_timers['sound'])
        return val

    def cycle(self, now=None):
        """
        Advance the machine to the given time. An instruction is executed if
        at least INSTRUCTION_PERIOD has passed since the last one, and the
        timers are decremented if at least TIMER_PERIOD has passed since the
        last tick. The two clocks are independent: while the CPU is waiting
        for a key press no instructions run, but the timers keep counting.

        :param now: the current time in seconds, defaults to time.monotonic()
        """
        if now is None:
            now = time.monotonic()

        if self.cpu_awaiting_key is None and \
                now >= self.cpu_last_instruction_time + INSTRUCTION_PERIOD:
            self.cpu_last_instruction_time = now
            self.cpu_execute_instruction()

        if now >= self.cpu_last_timer_time + TIMER_PERIOD:
            self.cpu_last_timer_time = now
            self.cpu_decrement_timers()

    def cpu_fetch_instruction(self):
        """
        Read the big-endian instruction word the program counter points to.
        """
        cpu_pc = self.cpu_registers['pc']
        if cpu_pc + 1 >= MAX_MEMORY:
            raise MemoryAccessException(cpu_pc)
        return (self.cpu_memory[cpu_pc] << 8) | self.cpu_memory[cpu_pc + 1]

    def cpu_execute_instruction(self):
        """
        Execute the next instruction pointed to by the program counter.

        :return: returns the operand executed
        """
        self.execute(self.cpu_fetch_instruction())
        return self.cpu_operand

    def execute(self, cpu_operator_param):
        """
        Decode and execute a single instruction word. The program counter is
        moved past the instruction before it runs, so jumps, calls and returns
        overwrite it and skips add a further 2. Unknown op-codes are logged
        and skipped, unless the CPU is strict.

        :param cpu_operator_param: the 16-bit instruction word
        :return: the decoded instruction
        """
        self.cpu_operand = cpu_operator_param
        cpu_instruction = decode(cpu_operator_param)
        logger.debug("executing %04X  pc: %03X  i: %03X  sp: %d",
                     cpu_operator_param, self.cpu_registers['pc'],
                     self.cpu_registers['index'], self.cpu_registers['sp'])
        self.cpu_registers['pc'] += 2

        if cpu_instruction.mnemonic == UNKNOWN:
            if self.cpu_strict:
                raise UnknownOpCodeException(cpu_operator_param)
            logger.warning("Unknown op-code %04X at %03X, skipping",
                           cpu_operator_param, self.cpu_registers['pc'] - 2)
            return cpu_instruction

        self.cpu_operation_lookup[cpu_instruction.mnemonic](cpu_instruction)
        return cpu_instruction

    def cpu_skip_next_instruction(self):
        self.cpu_registers['pc'] += 2

    def cpu_read_memory(self, address):
        """
        Read a byte on behalf of the current instruction.

        :param address: the memory address, not masked to 12 bits
        :return: the byte at the address
        """
        if not 0 <= address < MAX_MEMORY:
            raise MemoryAccessException(address, self.cpu_operand)
        return self.cpu_memory[address]

    def cpu_write_memory(self, address, value):
        if not 0 <= address < MAX_MEMORY:
            raise MemoryAccessException(address, self.cpu_operand)
        self.cpu_memory[address] = value

    def cpu_push_stack(self, address):
        """
        Push a return address onto the call stack.

        :param address: the address to return to
        """
        cpu_sp = self.cpu_registers['sp']
        if cpu_sp >= STACK_SIZE:
            raise StackOverflowException(self.cpu_operand & 0x0FFF)
        self.cpu_stack[cpu_sp] = address
        self.cpu_registers['sp'] = cpu_sp + 1

    def cpu_pop_stack(self):
        """
        Pop the most recent return address off the call stack, clearing the
        slot it occupied.

        :return: the return address
        """
        if self.cpu_registers['sp'] == 0:
            raise StackUnderflowException()
        self.cpu_registers['sp'] -= 1
        cpu_address = self.cpu_stack[self.cpu_registers['sp']]
        self.cpu_stack[self.cpu_registers['sp']] = 0
        return cpu_address

    def cpu_clear_screen(self, instruction):
        """
        00E0 - CLS

        Turn off every pixel on the screen.
        """
        self.cpu_screen.clear_screen()

    def cpu_return_from_subroutine(self, instruction):
        """
        00EE - RET

        Return from subroutine. The program counter is loaded with the
        address on top of the stack.
        """
        self.cpu_registers['pc'] = self.cpu_pop_stack()

    def cpu_jump_to_address(self, instruction):
        """
        1nnn - JUMP nnn

        Jump to address. The address to jump to is calculated using the bits
        taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_registers['pc'] = instruction.nnn

    def cpu_jump_to_subroutine(self, instruction):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter (which already
        points at the instruction after the call) on the stack. The
        subroutine to jump to is taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_push_stack(self.cpu_registers['pc'])
        self.cpu_registers['pc'] = instruction.nnn

    def cpu_skip_if_reg_equal_val(self, instruction):
        """
        3snn - SKE Vs, nn

        Skip if register contents equal to constant value. The calculation for
        the register and constant is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant

        The program counter is updated to skip the next instruction by
        advancing it by 2 bytes.
        """
        if self.cpu_registers['v'][instruction.x] == instruction.nn:
            self.cpu_skip_next_instruction()

    def cpu_skip_if_reg_not_equal_val(self, instruction):
        """
        4snn - SKNE Vs, nn

        Skip if register contents not equal to constant value.
        """
        if self.cpu_registers['v'][instruction.x] != instruction.nn:
            self.cpu_skip_next_instruction()

    def cpu_skip_if_reg_equal_reg(self, instruction):
        """
        5st0 - SKE Vs, Vt

        Skip if source register is equal to target register. The calculation
        for the registers to use is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.cpu_registers['v'][instruction.x] == self.cpu_registers['v'][instruction.y]:
            self.cpu_skip_next_instruction()

    def cpu_move_value_to_reg(self, instruction):
        """
        6snn - LOAD Vs, nn

        Move the constant value into the specified register. The calculation
        for the registers is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        self.cpu_registers['v'][instruction.x] = instruction.nn

    def cpu_add_value_to_reg(self, instruction):
        """
        7snn - ADD Vs, nn

        Add the constant value to the specified register, wrapping at 256.
        Unlike 8st4, the carry flag is not touched.
        """
        cpu_total = self.cpu_registers['v'][instruction.x] + instruction.nn
        self.cpu_registers['v'][instruction.x] = cpu_total & 0xFF

    def cpu_move_reg_into_reg(self, instruction):
        """
        8st0 - LOAD Vs, Vt

        Move the value of the source register into the value of the target
        register. The calculation for the registers is performed on the
        operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      0
        """
        self.cpu_registers['v'][instruction.x] = self.cpu_registers['v'][instruction.y]

    def cpu_logical_or(self, instruction):
        """
        8ts1 - OR   Vs, Vt
        """
        self.cpu_registers['v'][instruction.x] |= self.cpu_registers['v'][instruction.y]

    def cpu_logical_and(self, instruction):
        """
        8ts2 - AND  Vs, Vt
        """
        self.cpu_registers['v'][instruction.x] &= self.cpu_registers['v'][instruction.y]

    def cpu_exclusive_or(self, instruction):
        """
        8ts3 - XOR  Vs, Vt
        """
        self.cpu_registers['v'][instruction.x] ^= self.cpu_registers['v'][instruction.y]

    def cpu_add_reg_to_reg(self, instruction):
        """
        8ts4 - ADD  Vt, Vs

        Add the value in the source register to the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      4

        If a carry is generated, set a carry flag in register VF. The flag is
        written before the result, so when the target is VF it ends up
        holding the sum.
        """
        cpu_total = self.cpu_registers['v'][instruction.x] + self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][0xF] = 1 if cpu_total > 255 else 0
        self.cpu_registers['v'][instruction.x] = cpu_total & 0xFF

    def cpu_subtract_reg_from_reg(self, instruction):
        """
        8ts5 - SUB  Vt, Vs

        Subtract the value in the source register from the value in the
        target register, and store the result in the target register. The
        register calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      5

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target_reg = self.cpu_registers['v'][instruction.x]
        cpu_source_reg = self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][0xF] = 1 if cpu_target_reg >= cpu_source_reg else 0
        self.cpu_registers['v'][instruction.x] = (cpu_target_reg - cpu_source_reg) & 0xFF

    def cpu_right_shift_reg(self, instruction):
        """
        8s06 - SHR  Vs

        Shift the bits in the specified register 1 bit to the right. Bit
        0 will be shifted into register vf. The register calculation is
        as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source      0         6
        """
        cpu_value = self.cpu_registers['v'][instruction.x]
        self.cpu_registers['v'][0xF] = lsb(cpu_value)
        self.cpu_registers['v'][instruction.x] = cpu_value >> 1

    def cpu_subtract_reg_from_reg1(self, instruction):
        """
        8ts7 - SUBN Vt, Vs

        Subtract the value in the target register from the value in the
        source register, and store the result in the target register.

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target_reg = self.cpu_registers['v'][instruction.x]
        cpu_source_reg = self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][0xF] = 1 if cpu_source_reg >= cpu_target_reg else 0
        self.cpu_registers['v'][instruction.x] = (cpu_source_reg - cpu_target_reg) & 0xFF

    def cpu_left_shift_reg(self, instruction):
        """
        8s0E - SHL  Vs

        Shift the bits in the specified register 1 bit to the left. Bit
        7 will be shifted into register vf.
        """
        cpu_value = self.cpu_registers['v'][instruction.x]
        self.cpu_registers['v'][0xF] = msb(cpu_value)
        self.cpu_registers['v'][instruction.x] = (cpu_value << 1) & 0xFF

    def cpu_skip_if_reg_not_equal_reg(self, instruction):
        """
        9st0 - SKNE Vs, Vt

        Skip if source register is not equal to target register.
        """
        if self.cpu_registers['v'][instruction.x] != self.cpu_registers['v'][instruction.y]:
            self.cpu_skip_next_instruction()

    def cpu_load_index_reg_with_value(self, instruction):
        """
        Annn - LOAD I, nnn

        Load index register with constant value. The calculation for the
        constant value is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   constant  constant  constant
        """
        self.cpu_registers['index'] = instruction.nnn

    def cpu_jump_to_v0_plus_value(self, instruction):
        """
        Bnnn - JUMP V0 + nnn

        Load the program counter with the address in the operand plus the
        value of register V0.
        """
        self.cpu_registers['pc'] = self.cpu_registers['v'][0x0] + instruction.nnn

    def cpu_generate_random_number(self, instruction):
        """
        Ctnn - RAND Vt, nn

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register. The register and constant values are
        calculated as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target    value    value
        """
        self.cpu_registers['v'][instruction.x] = self.cpu_random.randint(0, 255) & instruction.nn

    def cpu_draw_sprite(self, instruction):
        """
        Dxyn - DRAW x, y, num_bytes

        Draws the sprite pointed to in the index register at the specified
        x and y coordinates. Drawing is done via an XOR routine, meaning that
        if the target pixel is already turned on, and a pixel is set to be
        turned on at that same location via the draw, then the pixel is turned
        off. The routine will wrap the pixels if they are drawn off the edge
        of the screen. Each sprite is 8 bits (1 byte) wide. The num_bytes
        parameter sets how tall the sprite is. Consecutive bytes in the memory
        pointed to by the index register make up the bytes of the sprite. Each
        bit in the sprite byte determines whether a pixel is turned on (1) or
        left alone (0). For example, assume that the index register pointed
        to the following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'. The
        x_source and y_source tell which registers contain the x and y
        coordinates for the sprite. If writing a pixel to a location causes
        that pixel to be turned off, then VF will be set to 1.

           Bits:  15-12     11-8      7-4       3-0
                  unused    x_source  y_source  num_bytes
        """
        cpu_x_pos = self.cpu_registers['v'][instruction.x]
        cpu_y_pos = self.cpu_registers['v'][instruction.y]
        cpu_index = self.cpu_registers['index']
        self.cpu_registers['v'][0xF] = 0
        logger.debug("drawing sprite at %03X, 8x%d", cpu_index, instruction.n)

        for cpu_y_index in range(instruction.n):
            cpu_sprite_byte = self.cpu_read_memory(cpu_index + cpu_y_index)

            for cpu_x_index in range(8):
                if not nth_bit(cpu_sprite_byte, cpu_x_index):
                    continue
                if self.cpu_screen.set_screen_pixel(
                        cpu_x_pos + cpu_x_index, cpu_y_pos + cpu_y_index, 1):
                    self.cpu_registers['v'][0xF] = 1

    def cpu_skip_if_key_pressed(self, instruction):
        """
        Es9E - SKPR Vs

        Skip the next instruction if the key named by the source register
        is pressed.
        """
        if self.cpu_screen.is_key_pressed(self.cpu_registers['v'][instruction.x]):
            self.cpu_skip_next_instruction()

    def cpu_skip_if_key_not_pressed(self, instruction):
        """
        EsA1 - SKUP Vs

        Skip the next instruction if the key named by the source register
        is NOT pressed.
        """
        if not self.cpu_screen.is_key_pressed(self.cpu_registers['v'][instruction.x]):
            self.cpu_skip_next_instruction()

    def cpu_move_delay_timer_into_reg(self, instruction):
        """
        Ft07 - LOAD Vt, DELAY

        Move the value of the delay timer into the target register.
        """
        self.cpu_registers['v'][instruction.x] = self.cpu_timers['delay']

    def cpu_wait_for_keypress(self, instruction):
        """
        Ft0A - KEYD Vt

        Stop execution until a key is pressed. Move the value of the key
        pressed into the specified register. The register calculation is
        as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         A

        Normally the CPU just remembers the target register and stops running
        instructions; the timers keep going and the driver hands the key over
        with cpu_resume_with_key(). With blocking_key_wait set, the call
        blocks on the screen instead; if the screen closes while waiting,
        its DisplayClosedException propagates and the register is left alone.
        """
        if self.cpu_blocking_key_wait:
            self.cpu_registers['v'][instruction.x] = self.cpu_screen.next_key() & 0xF
            return
        logger.debug("waiting for key press into V%X", instruction.x)
        self.cpu_awaiting_key = instruction.x

    def cpu_resume_with_key(self, key):
        """
        Complete a pending Ft0A with the key that was pressed.

        :param key: the keypad key (0 - F)
        :return: True if the CPU was waiting for the key
        """
        if self.cpu_awaiting_key is None:
            return False
        self.cpu_registers['v'][self.cpu_awaiting_key] = key & 0xF
        self.cpu_awaiting_key = None
        return True

    def cpu_move_reg_into_delay_timer(self, instruction):
        """
        Fs15 - LOAD DELAY, Vs
        """
        self.cpu_timers['delay'] = self.cpu_registers['v'][instruction.x]

    def cpu_move_reg_into_sound_timer(self, instruction):
        """
        Fs18 - LOAD SOUND, Vs
        """
        self.cpu_timers['sound'] = self.cpu_registers['v'][instruction.x]

    def cpu_add_reg_into_index(self, instruction):
        """
        Fs1E - ADD  I, Vs

        Add the value of the register into the index register value. VF is
        not changed and the result is not masked to 12 bits.
        """
        self.cpu_registers['index'] += self.cpu_registers['v'][instruction.x]

    def cpu_load_index_with_reg_sprite(self, instruction):
        """
        Fs29 - LOAD I, Vs

        Load the index with the sprite indicated in the source register. All
        sprites are 5 bytes long, so the location of the specified sprite
        is its index multiplied by 5.
        """
        self.cpu_registers['index'] = self.cpu_registers['v'][instruction.x] * FONT_SPRITE_SIZE

    def cpu_store_bcd_in_memory(self, instruction):
        """
        Fs33 - BCD

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> self.cpu_memory[I]
            tens       -> self.cpu_memory[I + 1]
            ones       -> self.cpu_memory[I + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> self.cpu_memory[I]
             2 -> self.cpu_memory[I + 1]
             3 -> self.cpu_memory[I + 2]
        """
        cpu_value = self.cpu_registers['v'][instruction.x]
        cpu_index = self.cpu_registers['index']
        self.cpu_write_memory(cpu_index, cpu_value // 100)
        self.cpu_write_memory(cpu_index + 1, (cpu_value // 10) % 10)
        self.cpu_write_memory(cpu_index + 2, cpu_value % 10)

    def cpu_store_regs_in_memory(self, instruction):
        """
        Fs55 - STOR [I], Vs

        Store the V registers in the memory pointed to by the index
        register. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     5         5

        The source nibble is the last register to store. For example, to
        store all of the V registers, the source would be 'F'.
        """
        for cpu_counter in range(instruction.x + 1):
            self.cpu_write_memory(self.cpu_registers['index'] + cpu_counter,
                                  self.cpu_registers['v'][cpu_counter])

    def cpu_read_regs_from_memory(self, instruction):
        """
        Fs65 - LOAD Vs, [I]

        Read the V registers from the memory pointed to by the index
        register, V0 through the source nibble inclusive.
        """
        for cpu_counter in range(instruction.x + 1):
            self.cpu_registers['v'][cpu_counter] = \
                self.cpu_read_memory(self.cpu_registers['index'] + cpu_counter)

    def cpu_reset(self, start_time=0.0):
        """
        Reset the CPU by blanking out all registers, the stack and the timers,
        and reseting the program counter to its starting value. Memory is
        left alone.

        :param start_time: the time (in seconds) both clocks restart from
        """
        self.cpu_registers['v'] = [0] * NUM_REGISTERS
        self.cpu_registers['pc'] = PROGRAM_COUNTER_START
        self.cpu_registers['sp'] = 0
        self.cpu_registers['index'] = 0
        self.cpu_stack = [0] * STACK_SIZE
        self.cpu_timers['delay'] = 0
        self.cpu_timers['sound'] = 0
        self.cpu_awaiting_key = None
        self.cpu_last_instruction_time = start_time
        self.cpu_last_timer_time = start_time

    def cpu_load_program(self, cpu_program, cpu_offset=PROGRAM_COUNTER_START):
        """
        Copy the program bytes into memory.

        :param cpu_program: the raw program bytes
        :param cpu_offset: the location in memory at which to load the program
        """
        cpu_available = MAX_MEMORY - cpu_offset
        if len(cpu_program) > cpu_available:
            raise ProgramTooLargeException(len(cpu_program), cpu_available)
        self.cpu_memory[cpu_offset:cpu_offset + len(cpu_program)] = cpu_program
        logger.debug("loaded %d bytes at %03X", len(cpu_program), cpu_offset)

    def cpu_load_rom(self, filename, cpu_offset=PROGRAM_COUNTER_START):
        """
        Load the ROM indicated by the filename into memory.

        :param filename: the name of the file to load
        :param cpu_offset: the location in memory at which to load the ROM
        """
        with open(filename, 'rb') as rom_file:
            cpu_romdata = rom_file.read()
        self.cpu_load_program(cpu_romdata, cpu_offset)

    def cpu_decrement_timers(self):
        """
        Decrement both the sound and delay timer. The screen buzzes on every
        tick that the sound timer counts down.
        """
        if self.cpu_timers['delay'] != 0:
            self.cpu_timers['delay'] -= 1

        if self.cpu_timers['sound'] != 0:
            self.cpu_screen.buzz()
            self.cpu_timers['sound'] -= 1
