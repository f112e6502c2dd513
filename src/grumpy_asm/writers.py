from __future__ import annotations
from typing import Iterable, List, Tuple

from .isa import Instr, Push, Vloc
from .encoding import Encoded
from .utils import u32_be, hex_bytes

def split_sentinel(instrs: List[Instr]) -> Tuple[int, List[Instr]]:
    """Separa el centinela final: devuelve (pc_entrada, cuerpo).

    Si la última instrucción no es push de una Vloc, el pc de entrada es 0.
    """
    if not instrs:
        return 0, []
    last = instrs[-1]
    entry = 0
    if isinstance(last, Push) and isinstance(last.val, Vloc):
        entry = last.val.value
    return entry, list(instrs[:-1])

def build_image(entry_pc: int, words: Iterable[Encoded]) -> bytes:
    """| entry_pc: u32 big-endian | instr_0 | instr_1 | ... |"""
    return u32_be(entry_pc) + b"".join(w.data for w in words)

def output_path(source: str) -> str:
    """Quita los dos últimos caracteres del fuente y añade '.o' ('prog.s' -> 'prog.o')."""
    return source[:-2] + ".o"

def write_image(image: bytes, path: str) -> None:
    with open(path, "wb") as f:
        f.write(image)

def to_listing_lines(words: Iterable[Encoded]) -> List[str]:
    return [f"{w.pc:>6}  {hex_bytes(w.data):<18}  {w.instr}" for w in words]

def write_listing(words: Iterable[Encoded], path: str) -> None:
    lines = to_listing_lines(words)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
