'''
modelo de tokens que el lexer entrega al parser
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from .isa import Mnemonic, Directive
from .regs import Register

# La línea de origen es metadato: no participa en la igualdad ni en el hash.
# Dos tokens son iguales si tienen la misma clase y el mismo contenido.

@dataclass(frozen=True)
class Mnem:
    """Mnemónico al inicio de una línea de instrucción."""
    mnemonic: Mnemonic
    line: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Reg:
    """Registro usado como argumento."""
    reg: Register
    line: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Dir:
    """Directiva sin argumentos ('.text', '.data', '.global')."""
    directive: Directive
    line: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Label:
    """Etiqueta: su identidad es solo el nombre."""
    name: str
    line: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Imm:
    """Inmediato entero con signo (literal '#...')."""
    value: int
    line: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Newline:
    """Separador entre líneas lógicas; nunca aparece tras la última."""
    line: int = field(default=0, compare=False)

Token = Union[Mnem, Reg, Dir, Label, Imm, Newline]
