# src/arm64_asm/lexer.py
from __future__ import annotations
import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .diagnostics import AsmError, Diagnostic
from .isa import mnemonic as lookup_mnemonic, directive as lookup_directive
from .regs import lookup_reg
from .state import AssemblerState
from .tokens import Token, Mnem, Reg, Dir, Label, Imm, Newline
from .utils import is_signed_nbit

logger = logging.getLogger(__name__)

# Los inmediatos se guardan como enteros con signo de 32 bits
IMM_BITS = 32

COMMENT_SPLIT_RE = re.compile(r"(;|//)")
LABEL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
DIRECTIVE_RE = re.compile(r"^\.(\S*)(.*)$")
IMM_RE = re.compile(
    r"^(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]+)|0b(?P<bin>[01]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))$"
)

def strip_comment(line: str) -> str:
    """Remove surrounding whitespace and anything from ';' or '//' on."""
    m = COMMENT_SPLIT_RE.split(line.strip(), maxsplit=1)
    return m[0].strip()

def is_directive(line: str) -> bool:
    return line.startswith('.')

def label_definition(line: str) -> Optional[str]:
    """Return the raw name if the line is a 'name:' definition, else None.

    The name is returned unvalidated; see check_label_name.
    """
    if line.endswith(':'):
        return line[:-1]
    return None

def check_label_name(name: str) -> None:
    """Lanza ValueError si el nombre no es [A-Za-z_][A-Za-z0-9_]*."""
    if not name or not (name[0] == '_' or name[0].isalpha()):
        raise ValueError("La etiqueta debe empezar por una letra o un guion bajo")
    if any(ch.isspace() for ch in name):
        raise ValueError("No se permiten espacios en el nombre de la etiqueta")
    if not LABEL_NAME_RE.match(name):
        raise ValueError("Carácter inesperado en la etiqueta (solo alfanuméricos y guiones bajos)")

def split_mnemonic_operands(line: str) -> Tuple[str, str]:
    s = line.strip()
    if not s:
        return "", ""
    parts = s.split(' ', 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()

def split_operands(op_str: str) -> List[str]:
    """Divide los argumentos por comas; un argumento vacío es un error."""
    out = []
    for piece in op_str.split(','):
        s = piece.strip()
        if not s:
            raise ValueError("Se esperaba un argumento (etiqueta, registro o inmediato) antes/después de la coma")
        out.append(s)
    return out

def parse_immediate(token: str) -> int:
    """Convierte '#34', '#0xF', '#0b101', '#-8' a entero.

    Lanza ValueError si el literal no es numérico o no cabe en 32 bits con signo.
    """
    body = token[1:] if token.startswith('#') else token
    m = IMM_RE.match(body)
    if not m:
        raise ValueError(f"Inmediato inválido: {token}")
    if m.group("hex"):
        value = int(m.group("hex"), 16)
    elif m.group("bin"):
        value = int(m.group("bin"), 2)
    elif m.group("oct") is not None:
        value = int(m.group("oct"), 8)
    else:
        value = int(m.group("dec"), 10)
    if m.group("sign") == "-":
        value = -value
    if not is_signed_nbit(value, IMM_BITS):
        raise ValueError(f"Inmediato fuera de rango: {token}")
    return value

def collect_labels(lines: Iterable[str]) -> Dict[str, Label]:
    """Pre-scan: tabla nombre -> Label con todas las definiciones 'name:' del texto.

    Permite que un salto haga referencia a una etiqueta definida más abajo.
    Los nombres inválidos se ignoran aquí; el lexer los rechaza al llegar a su línea.
    """
    table: Dict[str, Label] = {}
    for lineno, raw in enumerate(lines, start=1):
        core = strip_comment(raw)
        if not core or is_directive(core):
            continue
        name = label_definition(core)
        if name is not None and LABEL_NAME_RE.match(name):
            table.setdefault(name, Label(name, line=lineno))
    return table

def split_physical_lines(text: str) -> List[str]:
    """Divide solo por '\n' (quitando un '\r' final), para que la numeración
    de líneas coincida con la del archivo."""
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]

def _col(raw: str, text: str, start: int = 0) -> Optional[int]:
    idx = raw.find(text, start)
    return idx + 1 if idx >= 0 else None

def _lex_argument(arg: str, col: Optional[int], lineno: int, labels: Dict[str, Label]) -> Token:
    if arg in labels:
        return labels[arg]
    try:
        if arg[0] == '#':
            return Imm(parse_immediate(arg), line=lineno)
        if arg[0] in ('w', 'x'):
            return Reg(lookup_reg(arg), line=lineno)
    except ValueError as ex:
        raise AsmError.lexical(str(ex), line=lineno, col=col, text=arg) from None
    raise AsmError.lexical(f"Argumento inválido: {arg}", line=lineno, col=col, text=arg,
                           hint="se esperaba una etiqueta definida, un registro (x1..x32, w1..w32) o un inmediato '#'")

def _lex_directive(core: str, raw: str, lineno: int) -> List[Token]:
    m = DIRECTIVE_RE.match(core)
    try:
        d = lookup_directive(m.group(1))
    except KeyError:
        raise AsmError.lexical(f"Directiva inválida: {core}", line=lineno, col=_col(raw, core), text=core) from None
    if m.group(2).strip():
        raise AsmError.lexical(f"Las directivas con argumentos no están soportadas: {core}",
                               line=lineno, col=_col(raw, core), text=core)
    return [Dir(d, line=lineno)]

def _lex_label(name: str, raw: str, lineno: int, labels: Dict[str, Label]) -> List[Token]:
    try:
        check_label_name(name)
    except ValueError as ex:
        raise AsmError.lexical(str(ex), line=lineno, col=_col(raw, name), text=name) from None
    # Identidad por nombre: una referencia previa y la definición son el mismo Label
    labels.setdefault(name, Label(name, line=lineno))
    return [Label(name, line=lineno)]

def _lex_instruction(core: str, raw: str, lineno: int, labels: Dict[str, Label]) -> List[Token]:
    mn, op_str = split_mnemonic_operands(core)
    try:
        m = lookup_mnemonic(mn)
    except KeyError:
        raise AsmError.lexical(f"Se esperaba un mnemónico al inicio de la línea: {mn}",
                               line=lineno, col=_col(raw, mn), text=mn) from None
    # Los argumentos empiezan tras el mnemónico
    start = raw.find(core) + len(mn)
    if not op_str:
        raise AsmError.lexical(f"Se esperaban argumentos tras el mnemónico '{mn}'", line=lineno, text=core)
    try:
        args = split_operands(op_str)
    except ValueError as ex:
        raise AsmError.lexical(str(ex), line=lineno, col=_col(raw, op_str, start), text=op_str) from None
    tokens: List[Token] = [Mnem(m, line=lineno)]
    # Columna de cada argumento: se busca en orden a partir del anterior
    cursor = start
    for a in args:
        pos = raw.find(a, cursor)
        cursor = pos + len(a)
        tokens.append(_lex_argument(a, pos + 1, lineno, labels))
    return tokens

def lex_line(raw: str, lineno: int, labels: Dict[str, Label]) -> List[Token]:
    """Tokeniza una línea física. Lanza AsmError ante cualquier error léxico."""
    core = strip_comment(raw)
    if not core:
        return []
    if is_directive(core):
        return _lex_directive(core, raw, lineno)
    name = label_definition(core)
    if name is not None:
        return _lex_label(name, raw, lineno, labels)
    return _lex_instruction(core, raw, lineno, labels)

def tokenize(text: str, state: AssemblerState, *, filename: Optional[str] = None) -> List[Diagnostic]:
    """
    Convierte el texto fuente en tokens y los añade a state.tokens.

    Reglas:
      - Comentarios: ';' o '//' hasta fin de línea.
      - Directivas: '.nombre' sin argumentos.
      - Etiquetas: 'nombre:' sola en su línea.
      - Instrucciones: 'mnemónico arg1, arg2, ...'.
      - Entre dos líneas con tokens se emite un Newline; nunca tras la última.

    Todo o nada: ante el primer error devuelve [Diagnostic] y no modifica el estado.
    Devuelve [] si todo fue bien.
    """
    lines = split_physical_lines(text)
    labels = dict(state.labels)
    for name, lab in collect_labels(lines).items():
        labels.setdefault(name, lab)

    out: List[Token] = []
    prev = 0
    try:
        for lineno, raw in enumerate(lines, start=1):
            line_tokens = lex_line(raw, lineno, labels)
            if not line_tokens:
                continue
            if out:
                out.append(Newline(line=prev))
            logger.debug("línea %d: %d tokens", lineno, len(line_tokens))
            out.extend(line_tokens)
            prev = lineno
    except AsmError as ex:
        logger.debug("tokenize abortado: %s", ex)
        return [ex.with_file(filename)]

    state.tokens.extend(out)
    state.labels = labels
    return []
