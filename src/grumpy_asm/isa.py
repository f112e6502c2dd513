'''
modelo de la GrumpyVM: valores, operadores, instrucciones nativas y tabla de opcodes
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Literal, Union

# ---- Valores ----

@dataclass(frozen=True)
class Vunit:
    """El valor unidad."""
    def __str__(self) -> str:
        return "tt"

@dataclass(frozen=True)
class Vi32:
    """Entero de 32 bits con signo."""
    value: int
    def __str__(self) -> str:
        return str(self.value)

@dataclass(frozen=True)
class Vbool:
    value: bool
    def __str__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True)
class Vloc:
    """Posición de pila o de instrucción (u32)."""
    value: int
    def __str__(self) -> str:
        return str(self.value)

@dataclass(frozen=True)
class Vundef:
    """El valor indefinido."""
    def __str__(self) -> str:
        return "undef"

# Tipos internos de la máquina: nunca aparecen en el fuente ni los genera el ensamblador.

@dataclass(frozen=True)
class Vsize:
    """Metadatos de tamaño de objetos de varias casillas en el heap."""
    value: int
    def __str__(self) -> str:
        return f"<size {self.value}>"

@dataclass(frozen=True)
class Vaddr:
    """Puntero al heap."""
    value: int
    def __str__(self) -> str:
        return f"<addr {self.value}>"

Value = Union[Vunit, Vi32, Vbool, Vloc, Vundef, Vsize, Vaddr]

def is_internal(v: Value) -> bool:
    return isinstance(v, (Vsize, Vaddr))

# ---- Operadores ----

class Unop(Enum):
    NEG = "neg"

    def __str__(self) -> str:
        return self.value

class Binop(Enum):
    ADD = "+"
    MUL = "*"
    SUB = "-"
    DIV = "/"
    LT = "<"
    EQ = "=="

    def __str__(self) -> str:
        return self.value

# ---- Instrucciones nativas ----

@dataclass(frozen=True)
class Push:
    """push v: apila el valor v."""
    val: Value
    def __str__(self) -> str:
        return f"push {self.val}"

@dataclass(frozen=True)
class Pop:
    def __str__(self) -> str:
        return "pop"

@dataclass(frozen=True)
class Peek:
    """peek i: apila el i-ésimo valor desde la cima."""
    offset: int
    def __str__(self) -> str:
        return f"peek {self.offset}"

@dataclass(frozen=True)
class Unary:
    op: Unop
    def __str__(self) -> str:
        return f"unary {self.op}"

@dataclass(frozen=True)
class Binary:
    op: Binop
    def __str__(self) -> str:
        return f"binary {self.op}"

@dataclass(frozen=True)
class Swap:
    def __str__(self) -> str:
        return "swap"

@dataclass(frozen=True)
class Alloc:
    def __str__(self) -> str:
        return "alloc"

@dataclass(frozen=True)
class Set:
    def __str__(self) -> str:
        return "set"

@dataclass(frozen=True)
class Get:
    def __str__(self) -> str:
        return "get"

@dataclass(frozen=True)
class Var:
    """var i: apila el valor en la posición fp+i."""
    offset: int
    def __str__(self) -> str:
        return f"var {self.offset}"

@dataclass(frozen=True)
class Store:
    """store i: guarda la cima en la posición fp+i."""
    offset: int
    def __str__(self) -> str:
        return f"store {self.offset}"

@dataclass(frozen=True)
class SetFrame:
    """setframe i: fp = len(pila) - i."""
    offset: int
    def __str__(self) -> str:
        return f"setframe {self.offset}"

@dataclass(frozen=True)
class Call:
    def __str__(self) -> str:
        return "call"

@dataclass(frozen=True)
class Ret:
    def __str__(self) -> str:
        return "ret"

@dataclass(frozen=True)
class Branch:
    def __str__(self) -> str:
        return "branch"

@dataclass(frozen=True)
class Halt:
    def __str__(self) -> str:
        return "halt"

Instr = Union[Push, Pop, Peek, Unary, Binary, Swap, Alloc, Set, Get,
              Var, Store, SetFrame, Call, Ret, Branch, Halt]

# ---- Tabla de opcodes ----

# Clase de operando que sigue al mnemónico
OperandKind = Literal["none", "value", "u32", "unop", "binop"]

@dataclass(frozen=True)
class OpSpec:
    """Especificación de una instrucción nativa.

    - mnemonic: palabra clave en el fuente
    - opcode: byte que la identifica en la imagen
    - operand: clase del único operando (o 'none')
    - cls: clase Python que la representa
    """
    mnemonic: str
    opcode: int
    operand: OperandKind
    cls: type

SPEC: Dict[str, OpSpec] = {}
_BY_CLASS: Dict[type, OpSpec] = {}

def _add(mnemonic: str, opcode: int, operand: OperandKind, cls: type):
    sp = OpSpec(mnemonic, opcode, operand, cls)
    SPEC[mnemonic] = sp
    _BY_CLASS[cls] = sp

_add("push",     0x00, "value", Push)
_add("pop",      0x01, "none",  Pop)
_add("peek",     0x02, "u32",   Peek)
_add("unary",    0x03, "unop",  Unary)
_add("binary",   0x04, "binop", Binary)
_add("swap",     0x05, "none",  Swap)
_add("alloc",    0x06, "none",  Alloc)
_add("set",      0x07, "none",  Set)
_add("get",      0x08, "none",  Get)
_add("var",      0x09, "u32",   Var)
_add("store",    0x0A, "u32",   Store)
_add("setframe", 0x0B, "u32",   SetFrame)
_add("call",     0x0C, "none",  Call)
_add("ret",      0x0D, "none",  Ret)
_add("branch",   0x0E, "none",  Branch)
_add("halt",     0x0F, "none",  Halt)

def spec(mnemonic: str) -> OpSpec:
    """Devuelve la especificación de una instrucción por mnemónico."""
    if mnemonic not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[mnemonic]

def spec_for(instr: Instr) -> OpSpec:
    """Devuelve la especificación correspondiente a una instrucción ya construida."""
    try:
        return _BY_CLASS[type(instr)]
    except KeyError:
        raise TypeError(f"No es una instrucción nativa: {instr!r}") from None
