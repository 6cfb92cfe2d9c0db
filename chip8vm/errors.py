"""CHIP-8 emulator exceptions."""


class Chip8Error(Exception):
    """Base class for conditions the engine reports to its host."""
    pass


class UnknownOpcodeError(Chip8Error):
    """Instruction word matches no entry of the opcode table."""

    def __init__(self, opcode: int, pc: int | None = None):
        self.opcode = opcode
        self.pc = pc
        if pc is None:
            message = f"Unknown opcode 0x{opcode:04X}"
        else:
            message = f"Unknown opcode 0x{opcode:04X} at 0x{pc:03X}"
        super().__init__(message)


class StackOverflowError(Chip8Error):
    """CALL with all 16 stack slots in use."""
    pass


class StackUnderflowError(Chip8Error):
    """RET with an empty stack."""
    pass


class ProgramTooLargeError(Chip8Error):
    """Program does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program is {size} bytes, only {capacity} bytes available")
