"""A small Brainf**k compiler and interpreter running a sorting program."""

from enum import IntEnum
from typing import NamedTuple, Optional

from ambench.microbench.common import BenchRandom, Setting, checksum

PROGRAM_SIZE = 4096
STACK_SIZE = 512
DATA_SIZE = 4096

CODE = (">>+>>>>>,[>+>>,]>+[--[+<<<-]<[<+>-]<[<[->[<<<+>>>>+<-]<<[>>+>[->]<<[<]"
        "<-]>]>>>+<[[-]<[>+<-]<]>[[>>>]+<<<-<[<<[<<<]>>+>[>>>]<-]<<[<<<]>[>>[>>"
        ">]<+<<[<<<]>-]]+<<<]+[->>>]>>]>>[.>>>]")

_SYMBOLS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Op(IntEnum):
    """Instruction codes of the compiled program."""

    END = 0
    INC_DP = 1
    DEC_DP = 2
    INC_VAL = 3
    DEC_VAL = 4
    OUT = 5
    IN = 6
    JMP_FWD = 7
    JMP_BCK = 8


class Instruction(NamedTuple):
    op: Op
    operand: int = 0


_SIMPLE_OPS = {
    ">": Op.INC_DP,
    "<": Op.DEC_DP,
    "+": Op.INC_VAL,
    "-": Op.DEC_VAL,
    ".": Op.OUT,
    ",": Op.IN,
}


def compile_bf(code: str) -> list[Instruction]:
    """Compile source text to instructions ending with ``Op.END``.

    Raises ValueError on unbalanced brackets, nesting deeper than the jump
    stack, or a program that does not fit.
    """
    program: list[Instruction] = []
    stack: list[int] = []
    for ch in code:
        if len(program) >= PROGRAM_SIZE:
            break
        pc = len(program)
        if ch in _SIMPLE_OPS:
            program.append(Instruction(_SIMPLE_OPS[ch]))
        elif ch == "[":
            if len(stack) == STACK_SIZE:
                raise ValueError("brackets nested too deeply")
            stack.append(pc)
            program.append(Instruction(Op.JMP_FWD))
        elif ch == "]":
            if not stack:
                raise ValueError("unmatched ']'")
            target = stack.pop()
            program.append(Instruction(Op.JMP_BCK, target))
            program[target] = Instruction(Op.JMP_FWD, pc)
    if stack:
        raise ValueError("unmatched '['")
    if len(program) >= PROGRAM_SIZE:
        raise ValueError("program too long")
    program.append(Instruction(Op.END))
    return program


def execute_bf(program: list[Instruction], data: bytes) -> bytes:
    """Run a compiled program reading ``data`` as input; return its output.

    Cells are 16-bit; input past the end reads as zero. Execution stops at
    ``Op.END`` or when the data pointer leaves the tape.
    """
    tape = [0] * DATA_SIZE
    output = bytearray()
    source = iter(data)
    pc = 0
    ptr = 0
    while 0 <= ptr < DATA_SIZE:
        op, operand = program[pc]
        if op is Op.END:
            break
        if op is Op.INC_DP:
            ptr += 1
        elif op is Op.DEC_DP:
            ptr -= 1
        elif op is Op.INC_VAL:
            tape[ptr] = (tape[ptr] + 1) & 0xFFFF
        elif op is Op.DEC_VAL:
            tape[ptr] = (tape[ptr] - 1) & 0xFFFF
        elif op is Op.OUT:
            output.append(tape[ptr] & 0xFF)
        elif op is Op.IN:
            value = next(source, 0)
            tape[ptr] = value if value < 0x80 else value | 0xFF00
        elif op is Op.JMP_FWD:
            if not tape[ptr]:
                pc = operand
        elif op is Op.JMP_BCK:
            if tape[ptr]:
                pc = operand
        pc += 1
    return bytes(output)


class BfBench:
    """Sort random characters with a Brainf**k program."""

    name = "bf"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.input = b""
        self.output: Optional[bytes] = None

    def prepare(self) -> None:
        rng = BenchRandom()
        rng.srand(1)
        self.input = "".join(_SYMBOLS[rng.rand() % len(_SYMBOLS)]
                             for _ in range(self.setting.size)).encode("ascii")
        self.output = None

    def run(self) -> None:
        self.output = execute_bf(compile_bf(CODE), self.input)

    def validate(self) -> bool:
        if self.output is None:
            return False
        return (len(self.output) == self.setting.size
                and checksum(self.output) == self.setting.checksum)