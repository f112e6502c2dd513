from __future__ import annotations
import argparse, sys
from typing import List, Optional, Tuple

from .parser import parse
from .linker import assemble, AssembleResult
from .encoding import encode, EncodeResult
from .writers import split_sentinel, build_image, output_path, write_image, write_listing
from .diagnostics import Diagnostic, has_errors

def assemble_text(text: str, *, filename: str | None = None, strict: bool = False
                  ) -> Tuple[list, List[Diagnostic], Optional[AssembleResult], Optional[EncodeResult]]:
    """Parsea, hace PASADA 1 y PASADA 2, y codifica el cuerpo (sin centinela).
    Devuelve (nodes, diagnostics_totales, asm_result, enc_result).
    Si el parseo falla no se ensambla nada: asm_result y enc_result son None."""
    nodes, diags_parse = parse(text, filename=filename)
    if has_errors(diags_parse):
        return nodes, list(diags_parse), None, None
    asm = assemble(nodes, strict=strict)
    _, body = split_sentinel(asm.instrs)
    enc = encode(body)
    diags = list(diags_parse) + [_with_file(d, filename) for d in asm.diagnostics + enc.diagnostics]
    return nodes, diags, asm, enc

def assemble_image(text: str, *, filename: str | None = None, strict: bool = False
                   ) -> Tuple[Optional[bytes], List[Diagnostic]]:
    """Imagen completa (cabecera + instrucciones) o None si hubo errores."""
    _, diags, asm, enc = assemble_text(text, filename=filename, strict=strict)
    if asm is None or enc is None or has_errors(diags):
        return None, diags
    entry, _ = split_sentinel(asm.instrs)
    return build_image(entry, enc.words), diags

def _with_file(d: Diagnostic, filename: str | None) -> Diagnostic:
    if filename is None or d.file is not None:
        return d
    return Diagnostic(d.severity, d.message, d.line, d.col, d.hint, filename)

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="GrumpyVM two-pass assembler")
    ap.add_argument("source", help="archivo .s de entrada")
    ap.add_argument("-o", "--output", help="imagen de salida (por defecto: fuente sin sus 2 últimos caracteres + '.o')")
    ap.add_argument("--listing", metavar="PATH", help="escribe también un listado pc/bytes/instrucción")
    ap.add_argument("--strict", action="store_true", help="una etiqueta no definida es un error (por defecto se descarta el push)")
    args = ap.parse_args(argv)

    try:
        with open(args.source, "r", encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    nodes, diags, asm, enc = assemble_text(text, filename=args.source, strict=args.strict)

    for d in diags:
        # imprimimos todo; si hay error, devolvemos código 1 sin escribir nada
        print(d, file=sys.stderr)

    if asm is None or enc is None or has_errors(diags):
        return 1

    entry, _ = split_sentinel(asm.instrs)
    image = build_image(entry, enc.words)
    out = args.output or output_path(args.source)
    try:
        write_image(image, out)
        if args.listing:
            write_listing(enc.words, args.listing)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(enc.words)} instrucciones, entrada en pc {entry} → {out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
