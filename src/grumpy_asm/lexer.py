from __future__ import annotations
import re
from typing import List, Tuple

TOKEN_RE = re.compile(r"\S+")

def is_blank(line: str) -> bool:
    return not line.strip()

def split_tokens(line: str) -> List[str]:
    """Tokens separados por espacios en blanco (sin comentarios: la gramática no los tiene)."""
    return line.split()

def token_cols(line: str) -> List[int]:
    """Columna (base 1) donde empieza cada token de la línea."""
    return [m.start() + 1 for m in TOKEN_RE.finditer(line)]

def split_mnemonic_operands(line: str) -> Tuple[str, List[str]]:
    """Devuelve (mnemónico, operandos). El mnemónico distingue mayúsculas: 'PUSH' no es 'push'."""
    toks = split_tokens(line)
    if not toks:
        return "", []
    return toks[0], toks[1:]
