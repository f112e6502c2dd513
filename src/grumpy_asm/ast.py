'''
dataclases de pseudo-instrucciones (PLabel, PPush, PI)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union

from .isa import Instr

# ---- Nodos a nivel de fuente ----
# line/col sólo sirven para diagnósticos y no participan en la igualdad.

@dataclass(frozen=True)
class PLabel:
    """Definición de etiqueta (p.ej., 'Lloop:'); etiqueta la siguiente instrucción."""
    name: str
    line: Optional[int] = field(default=None, compare=False)
    col: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.name}:"

@dataclass(frozen=True)
class PPush:
    """Apila la dirección de una etiqueta; el ensamblador la resuelve a push <Vloc>."""
    name: str
    line: Optional[int] = field(default=None, compare=False)
    col: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"push {self.name}"

@dataclass(frozen=True)
class PI:
    """Instrucción nativa tal cual."""
    instr: Instr
    line: Optional[int] = field(default=None, compare=False)
    col: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return str(self.instr)

PInstr = Union[PLabel, PPush, PI]
