# src/arm64_asm/parser.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .ast import MachineInstruction, Instruction
from .diagnostics import AsmError, Diagnostic
from .state import AssemblerState, INSTRUCTION_SIZE
from .tokens import Token, Mnem, Dir, Label, Newline
from .validation import validate_arguments, kind_of, formats, describe

logger = logging.getLogger(__name__)

def split_lines(tokens: List[Token]) -> List[List[Token]]:
    """Agrupa los tokens en líneas lógicas separadas por Newline.

    Se añade un Newline sintético al final para vaciar la última línea y se
    retira al terminar, de modo que la lista recibida queda como estaba.
    """
    lines: List[List[Token]] = []
    cur: List[Token] = []
    tokens.append(Newline())
    try:
        for tok in tokens:
            if isinstance(tok, Newline):
                if cur:
                    lines.append(cur)
                cur = []
            else:
                cur.append(tok)
    finally:
        tokens.pop()
    return lines

def _line_of(tokens: List[Token]) -> Optional[int]:
    line = tokens[0].line
    return line or None

def _parse_label(line: List[Token], pc: int, addresses: Dict[Label, int]) -> Label:
    label = line[0]
    if len(line) > 1:
        raise AsmError.structural(f"Tokens inesperados tras la etiqueta '{label.name}'",
                                  line=_line_of(line), text=label.name,
                                  hint="una etiqueta debe ir sola en su línea")
    if label in addresses:
        raise AsmError.structural(f"Etiqueta redefinida: {label.name}", line=_line_of(line), text=label.name)
    addresses[label] = pc
    logger.debug("etiqueta %s -> 0x%08x", label.name, pc)
    return label

def _parse_machine(line: List[Token], pc: int) -> MachineInstruction:
    mn = line[0].mnemonic
    args = line[1:]
    try:
        ok = validate_arguments(mn, args)
    except KeyError as ex:
        raise AsmError.internal(f"Mnemónico sin formas de argumentos registradas: {mn.value}",
                                line=_line_of(line), text=mn.value) from ex
    if not ok:
        got = describe([kind_of(t) for t in args])
        expected = " | ".join(describe(f) for f in formats(mn))
        raise AsmError.structural(f"Argumentos inválidos para '{mn.value}': {got}",
                                  line=_line_of(line), text=mn.value,
                                  hint=f"formas aceptadas: {expected}")
    return MachineInstruction(mnemonic=mn, arguments=tuple(args), line=line[0].line, address=pc)

def parse_line(line: List[Token], state: AssemblerState) -> Instruction:
    """Convierte una línea lógica en Instruction, actualizando etiquetas y pc del estado."""
    first = line[0]
    if isinstance(first, Label):
        return _parse_label(line, state.pc, state.label_addresses)
    if isinstance(first, Mnem):
        ins = _parse_machine(line, state.pc)
        state.pc += INSTRUCTION_SIZE
        return ins
    if isinstance(first, Dir):
        raise AsmError.structural(f"Las instrucciones de directiva aún no están soportadas: .{first.directive.value}",
                                  line=_line_of(line), text=f".{first.directive.value}")
    # Reg, Imm o Newline solo pueden ser argumentos
    raise AsmError.structural("Instrucción inválida", line=_line_of(line), text=type(first).__name__,
                              hint="una línea debe empezar por un mnemónico, una etiqueta o una directiva")

def parse(state: AssemblerState, *, filename: Optional[str] = None) -> List[Diagnostic]:
    """
    Recorre state.tokens línea a línea y rellena state.instructions,
    state.label_addresses y state.pc.

    - Etiqueta: se asocia al pc actual (dirección de la siguiente instrucción).
    - Mnemónico: se validan los argumentos y el pc avanza 4 bytes.
    - Directiva, registro o inmediato al inicio de línea: error.

    Todo o nada: ante el primer error devuelve [Diagnostic] y deja el estado como estaba.
    Devuelve [] si todo fue bien.
    """
    saved_pc = state.pc
    saved_addresses = dict(state.label_addresses)
    produced: List[Instruction] = []
    try:
        for line in split_lines(state.tokens):
            produced.append(parse_line(line, state))
    except AsmError as ex:
        logger.debug("parse abortado: %s", ex)
        state.pc = saved_pc
        state.label_addresses = saved_addresses
        return [ex.with_file(filename)]

    state.instructions.extend(produced)
    logger.debug("parse: %d instrucciones, pc final 0x%08x", len(produced), state.pc)
    return []
