from __future__ import annotations
import argparse, logging, os, sys
from typing import List, Optional, Tuple

from .ast import MachineInstruction
from .diagnostics import Diagnostic, warning
from .lexer import tokenize
from .parser import parse
from .state import AssemblerState
from .writers import to_listing_lines, to_symbol_lines, write_listing

logger = logging.getLogger(__name__)

def assemble_text(text: str, *, filename: str | None = None) -> Tuple[AssemblerState, List[Diagnostic]]:
    """Tokeniza y parsea en un AssemblerState nuevo.
    Devuelve (estado, diagnostics). Si hay un error, el estado no tiene instrucciones."""
    state = AssemblerState()
    diags = tokenize(text, state, filename=filename)
    if diags:
        return state, diags
    diags = parse(state, filename=filename)
    if diags:
        return state, diags
    if not any(isinstance(i, MachineInstruction) for i in state.instructions):
        diags = [warning("El programa no contiene instrucciones de máquina", file=filename)]
    logger.info("%s: %d tokens, %d instrucciones, %d etiquetas, pc=0x%08x",
                filename or "<mem>", len(state.tokens), len(state.instructions),
                len(state.label_addresses), state.pc)
    return state, diags

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Front end de ensamblador ARM64 (tokenize + parse)")
    ap.add_argument("source", help="archivo .s/.asm de entrada")
    ap.add_argument("-o", "--output", help="archivo del listado (por defecto, salida estándar)")
    ap.add_argument("--symbols", action="store_true", help="añade la tabla de símbolos al listado")
    ap.add_argument("--log-level", default=os.environ.get("ARM64_ASM_LOG", "WARNING"),
                    help="nivel de logging (por defecto WARNING o $ARM64_ASM_LOG)")
    args = ap.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    state, diags = assemble_text(text, filename=args.source)

    had_error = False
    for d in diags:
        print(d, file=sys.stderr)
        if d.severity == "error":
            had_error = True

    if had_error:
        return 1

    lines = to_listing_lines(state.instructions)
    if args.symbols:
        lines += [""] + to_symbol_lines(state.symtab)

    if args.output is None:
        for line in lines:
            print(line)
        return 0

    try:
        write_listing(lines, args.output)
    except OSError as ex:
        print(f"ERROR al escribir el listado: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(state.instructions)} instrucciones → {args.output}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
