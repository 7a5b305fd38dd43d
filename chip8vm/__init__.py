from chip8vm.cpu import CPU
from chip8vm.display import Display
from chip8vm.exception import (
    DisplayClosedException,
    MachineFault,
    MemoryAccessException,
    ProgramTooLargeException,
    StackOverflowException,
    StackUnderflowException,
    UnknownOpCodeException,
)
