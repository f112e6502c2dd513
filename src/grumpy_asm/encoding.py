# src/grumpy_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Union

from .isa import (
    Value, Vunit, Vi32, Vbool, Vloc, Vundef, Vsize, Vaddr,
    Unop, Binop, Instr, Push, Peek, Unary, Binary, Var, Store, SetFrame,
    spec_for, is_internal,
)
from .utils import i32_be, u32_be
from .diagnostics import Diagnostic, error

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    pc: int       # índice de esta instrucción en el programa
    data: bytes
    instr: Instr

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

# ---------------- Tablas ----------------

# Tag reservado para los valores internos de la máquina
INTERNAL_TAG = 0x11

BINOP_CODES: Dict[Binop, int] = {
    Binop.ADD: 0x00,
    Binop.MUL: 0x01,
    Binop.SUB: 0x02,
    Binop.DIV: 0x03,
    Binop.LT:  0x04,
    Binop.EQ:  0x05,
}

# ---------------- Codificadores ----------------

def value_to_bytes(v: Value) -> bytes:
    if isinstance(v, Vunit):
        return b"\x00"
    if isinstance(v, Vi32):
        return b"\x01" + i32_be(v.value)
    if isinstance(v, Vbool):
        return b"\x02" if v.value else b"\x03"
    if isinstance(v, Vloc):
        return b"\x04" + u32_be(v.value)
    if isinstance(v, Vundef):
        return b"\x05"
    if isinstance(v, (Vsize, Vaddr)):
        return bytes([INTERNAL_TAG])
    raise TypeError(f"No es un valor: {v!r}")

def unop_to_bytes(op: Unop) -> bytes:
    # sólo existe 'neg'
    return b"\x00"

def binop_to_bytes(op: Binop) -> bytes:
    return bytes([BINOP_CODES[op]])

def instr_to_bytes(ins: Instr) -> bytes:
    """Byte de opcode seguido de la codificación de su operando."""
    head = bytes([spec_for(ins).opcode])
    if isinstance(ins, Push):
        return head + value_to_bytes(ins.val)
    if isinstance(ins, (Peek, Var, Store, SetFrame)):
        return head + u32_be(ins.offset)
    if isinstance(ins, Unary):
        return head + unop_to_bytes(ins.op)
    if isinstance(ins, Binary):
        return head + binop_to_bytes(ins.op)
    return head

def to_bytes(obj: Union[Value, Unop, Binop, Instr]) -> bytes:
    """Codificación binaria de cualquier valor, operador o instrucción."""
    if isinstance(obj, Unop):
        return unop_to_bytes(obj)
    if isinstance(obj, Binop):
        return binop_to_bytes(obj)
    if isinstance(obj, (Vunit, Vi32, Vbool, Vloc, Vundef, Vsize, Vaddr)):
        return value_to_bytes(obj)
    return instr_to_bytes(obj)

# ---------------- Codificador principal ----------------

def encode(instrs: List[Instr]) -> EncodeResult:
    diags: List[Diagnostic] = []
    words: List[Encoded] = []

    for pc, ins in enumerate(instrs):
        if isinstance(ins, Push) and is_internal(ins.val):
            diags.append(error(f"Valor interno no permitido en el programa (pc {pc}): {ins.val}"))
            continue
        try:
            data = instr_to_bytes(ins)
        except (TypeError, ValueError) as ex:
            diags.append(error(f"No se pudo codificar '{ins}' (pc {pc}): {ex}"))
            continue
        words.append(Encoded(pc=pc, data=data, instr=ins))

    return EncodeResult(words=words, diagnostics=diags)
