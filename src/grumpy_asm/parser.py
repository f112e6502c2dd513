# src/grumpy_asm/parser.py
from __future__ import annotations
import re
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from .lexer import is_blank, split_tokens, split_mnemonic_operands, token_cols
from .labels import is_label, is_label_def, parse_label_def
from .isa import (
    Value, Vunit, Vi32, Vbool, Vloc, Vundef,
    Unop, Binop, Instr, spec,
)
from .ast import PInstr, PLabel, PPush, PI
from .utils import is_i32, is_u32
from .diagnostics import Diagnostic, ParseError, error

DEC_RE  = re.compile(r"^[+-]?[0-9]+$")
UDEC_RE = re.compile(r"^\+?[0-9]+$")

_KEYWORD_VALUES: Dict[str, Value] = {
    "tt": Vunit(),
    "undef": Vundef(),
    "true": Vbool(True),
    "false": Vbool(False),
}

# ---------------- Tokens ----------------

def parse_value(token: str) -> Value:
    """tt | undef | true | false | i32 decimal | u32 decimal (→ Vloc)."""
    if token in _KEYWORD_VALUES:
        return _KEYWORD_VALUES[token]
    if DEC_RE.match(token):
        n = int(token)
        if is_i32(n):
            return Vi32(n)
        if is_u32(n):
            return Vloc(n)
        raise ParseError(f"Valor fuera de rango de 32 bits: '{token}'")
    raise ParseError(f"Valor inválido: '{token}'",
                     hint="se esperaba tt, undef, true, false o un entero de 32 bits")

def parse_u32(token: str) -> int:
    if not UDEC_RE.match(token):
        raise ParseError(f"Se esperaba un entero sin signo: '{token}'")
    n = int(token)
    if not is_u32(n):
        raise ParseError(f"Entero sin signo fuera de rango (0..4294967295): '{token}'")
    return n

def parse_unop(token: str) -> Unop:
    try:
        return Unop(token)
    except ValueError:
        raise ParseError(f"Operador unario inválido: '{token}'", hint="neg") from None

def parse_binop(token: str) -> Binop:
    try:
        return Binop(token)
    except ValueError:
        raise ParseError(f"Operador binario inválido: '{token}'", hint="+, *, -, /, < o ==") from None

_OPERAND_PARSERS: Dict[str, Callable[[str], object]] = {
    "value": parse_value,
    "u32": parse_u32,
    "unop": parse_unop,
    "binop": parse_binop,
}

# ---------------- Líneas ----------------

def parse_instr(line: str) -> Instr:
    """Parsea una instrucción nativa completa ('push 1', 'binary +', 'halt', ...)."""
    mnemonic, ops = split_mnemonic_operands(line)
    if not mnemonic:
        raise ParseError("Línea vacía")
    try:
        sp = spec(mnemonic)
    except KeyError:
        raise ParseError(f"Instrucción desconocida: '{mnemonic}'") from None

    if sp.operand == "none":
        if ops:
            raise ParseError(f"{mnemonic} no lleva operandos (sobra '{ops[0]}')")
        return sp.cls()

    if len(ops) != 1:
        what = "falta el operando" if not ops else f"sobran operandos: {' '.join(ops[1:])}"
        raise ParseError(f"{mnemonic} espera exactamente 1 operando ({what})")
    return sp.cls(_OPERAND_PARSERS[sp.operand](ops[0]))

def parse_pinstr(line: str) -> PInstr:
    """Parsea una línea de fuente a pseudo-instrucción.

    - 'push Lx'  -> PPush (si el operando no es etiqueta, es un push nativo de valor)
    - 'Lx:'      -> PLabel
    - resto      -> PI(instrucción nativa)
    """
    toks = split_tokens(line)
    if not toks:
        raise ParseError("Línea vacía")
    head = toks[0]

    if head == "push" and len(toks) == 2 and is_label(toks[1]):
        return PPush(toks[1])

    if is_label_def(head):
        if len(toks) > 1:
            raise ParseError(f"Sobran tokens tras la etiqueta '{head}'",
                             hint="cada definición de etiqueta va sola en su línea")
        return PLabel(parse_label_def(head))

    if head.endswith(":"):
        # parece una definición pero no cumple la sintaxis: reportamos el motivo
        parse_label_def(head)

    return PI(parse_instr(line))

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[PInstr], List[Diagnostic]]:
    """
    Devuelve (nodes, diagnostics) donde nodes es una lista de:
      - PLabel(name, line, col)
      - PPush(name, line, col)
      - PI(instr, line, col)

    Reglas:
      - Una pseudo-instrucción por línea; tokens separados por espacios.
      - Sólo LF o CRLF terminan una línea. Las líneas en blanco se ignoran y no hay comentarios.
      - Cada ParseError se convierte en un diagnóstico de error con su línea.
    """
    nodes: List[PInstr] = []
    diags: List[Diagnostic] = []

    # sólo "\n" (y "\r\n") separan líneas; \x0b, \x0c... son espacio dentro de la línea
    for lineno, raw in enumerate(text.split("\n"), start=1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        if is_blank(raw):
            continue
        col = token_cols(raw)[0]
        try:
            node = parse_pinstr(raw)
        except ParseError as ex:
            diags.append(error(ex.message, line=lineno, col=col, file=filename, hint=ex.hint))
            continue
        nodes.append(replace(node, line=lineno, col=col))

    return nodes, diags
