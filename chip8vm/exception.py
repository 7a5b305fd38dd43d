class UnknownOpCodeException(Exception):
    """
    A class to raise unknown op code exceptions.
    """
    def __init__(self, op_code):
        Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))
        self.op_code = op_code


class ProgramTooLargeException(Exception):
    """
    Raised when a program does not fit into the memory above the program
    start address.
    """
    def __init__(self, program_size, available):
        Exception.__init__(
            self, "Program is {} bytes, only {} bytes available".format(program_size, available))
        self.program_size = program_size
        self.available = available


class MachineFault(Exception):
    """
    Base class for conditions that leave the machine unable to continue.
    """


class StackOverflowException(MachineFault):
    def __init__(self, address):
        MachineFault.__init__(self, "Stack overflow calling subroutine at {:03X}".format(address))


class StackUnderflowException(MachineFault):
    def __init__(self):
        MachineFault.__init__(self, "Stack underflow on return")


class MemoryAccessException(MachineFault):
    def __init__(self, address, op_code=None):
        if op_code is None:
            message = "Cannot fetch instruction at {:04X}".format(address)
        else:
            message = "Memory access out of bounds at {:04X} executing op-code {:04X}".format(
                address, op_code)
        MachineFault.__init__(self, message)
        self.address = address
        self.op_code = op_code


class DisplayClosedException(Exception):
    """
    Raised by a display that is closed while the CPU is blocked waiting for
    a key press.
    """
    def __init__(self):
        Exception.__init__(self, "Display closed while waiting for a key press")
