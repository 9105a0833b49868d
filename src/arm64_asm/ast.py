'''
dataclases de instrucciones (MachineInstruction, DirectiveInstruction) que produce el parser
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union

from .isa import Mnemonic, Directive
from .tokens import Reg, Imm, Label

# ---- Argumentos de una instrucción de máquina ----

Argument = Union[Reg, Imm, Label]

# ---- Instrucciones ----

@dataclass(frozen=True)
class MachineInstruction:
    """Instrucción de máquina validada: mnemónico y argumentos en orden.

    `line` y `address` son metadatos (línea de origen y valor del pc asignado);
    no participan en la comparación.
    """
    mnemonic: Mnemonic
    arguments: Tuple[Argument, ...]
    line: int = field(default=0, compare=False)
    address: int = field(default=0, compare=False)

@dataclass(frozen=True)
class DirectiveInstruction:
    """Directiva con argumentos. Reservada: el parser todavía no la construye."""
    directive: Directive
    arguments: Tuple[Union[str, Directive], ...] = ()
    line: int = field(default=0, compare=False)

# Un Label en la lista de instrucciones marca el punto donde se definió
Instruction = Union[MachineInstruction, DirectiveInstruction, Label]
