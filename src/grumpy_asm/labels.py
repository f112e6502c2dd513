'''
sintaxis de etiquetas: validación de definiciones ('Lx:') y usos ('Lx')
'''

from __future__ import annotations
import re

from .diagnostics import ParseError

# 'L' o '_L' seguido de alfanuméricos ASCII
LABEL_RE = re.compile(r"^(?:L|_L)[A-Za-z0-9]*$")

def is_label(token: str) -> bool:
    """Indica si el token es un nombre de etiqueta válido (sin ':')."""
    return LABEL_RE.match(token) is not None

def is_label_def(token: str) -> bool:
    """Indica si el token es una definición de etiqueta válida ('Lx:')."""
    try:
        parse_label_def(token)
        return True
    except ParseError:
        return False

def parse_label_ref(token: str) -> str:
    """Devuelve el nombre de la etiqueta usada como operando o lanza ParseError."""
    if not is_label(token):
        raise ParseError(f"Etiqueta inválida: '{token}'",
                         hint="empieza por 'L' o '_L' y sigue con letras/dígitos ASCII")
    return token

def parse_label_def(token: str) -> str:
    """Devuelve el nombre definido por 'Lx:' o lanza ParseError."""
    if not token.endswith(":"):
        raise ParseError(f"Definición de etiqueta sin ':': '{token}'")
    return parse_label_ref(token[:-1])
