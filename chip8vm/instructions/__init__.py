"""CHIP-8 opcode family handlers."""
