# src/grumpy_asm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .ast import PInstr, PLabel, PPush, PI
from .isa import Instr, Push, Vloc
from .diagnostics import Diagnostic, error, warning, note

# ---------- Resultados ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: Dict[str, int]
    count: int                 # pc final = nº de instrucciones no-etiqueta
    diagnostics: List[Diagnostic]

@dataclass(frozen=True)
class ResolveResult:
    instrs: List[Instr]
    diagnostics: List[Diagnostic]

@dataclass(frozen=True)
class AssembleResult:
    instrs: List[Instr]        # cuerpo + centinela push <Vloc(count)>
    symtab: Dict[str, int]
    diagnostics: List[Diagnostic]

# ---------- Pasada 1 (direcciones de etiquetas) ----------

def first_pass(nodes: List[PInstr]) -> LinkResult:
    """Asigna a cada etiqueta el pc de la siguiente instrucción.

    Las etiquetas no avanzan el pc; push-etiqueta e instrucciones nativas avanzan 1.
    Redefinir una etiqueta sobrescribe su dirección (gana la última).
    """
    symtab: Dict[str, int] = {}
    first_line: Dict[str, int | None] = {}
    diags: List[Diagnostic] = []
    pc = 0

    for n in nodes:
        if isinstance(n, PLabel):
            if n.name in symtab:
                diags.append(warning(f"Etiqueta redefinida: {n.name} (pc {symtab[n.name]} -> {pc})",
                                     line=n.line, col=n.col))
                if first_line.get(n.name) is not None:
                    diags.append(note(f"definición anterior de {n.name}", line=first_line[n.name]))
            else:
                first_line[n.name] = n.line
            symtab[n.name] = pc
            continue
        pc += 1

    return LinkResult(symtab=symtab, count=pc, diagnostics=diags)

# ---------- Pasada 2 (generación de código) ----------

def second_pass(nodes: List[PInstr], symtab: Dict[str, int], *, strict: bool = False) -> ResolveResult:
    """Emite las instrucciones nativas en orden, resolviendo 'push Lx' a 'push <Vloc>'.

    Una etiqueta no definida hace que su push se descarte (y desplace las
    direcciones siguientes); con strict=True es un error.
    """
    out: List[Instr] = []
    diags: List[Diagnostic] = []

    for n in nodes:
        if isinstance(n, PLabel):
            continue
        if isinstance(n, PI):
            out.append(n.instr)
            continue
        if isinstance(n, PPush):
            addr = symtab.get(n.name)
            if addr is None:
                msg = f"Etiqueta no definida: {n.name}"
                if strict:
                    diags.append(error(msg, line=n.line, col=n.col))
                else:
                    diags.append(warning(msg + "; se descarta el push", line=n.line, col=n.col,
                                         hint="use --strict para tratarlo como error"))
                continue
            out.append(Push(Vloc(addr)))
            continue
        diags.append(error(f"Nodo desconocido en el ensamblador: {n!r}"))

    return ResolveResult(instrs=out, diagnostics=diags)

# ---------- Ensamblado completo ----------

def assemble(nodes: List[PInstr], *, strict: bool = False) -> AssembleResult:
    """Pasada 1 + pasada 2 + centinela final push <Vloc(count)>.

    El centinela lleva el pc final de la pasada 1; el escritor de imagen lo
    retira y lo usa como pc de entrada en la cabecera.
    """
    link = first_pass(nodes)
    res = second_pass(nodes, link.symtab, strict=strict)
    instrs = list(res.instrs)
    instrs.append(Push(Vloc(link.count)))
    return AssembleResult(
        instrs=instrs,
        symtab=link.symtab,
        diagnostics=list(link.diagnostics) + list(res.diagnostics),
    )
