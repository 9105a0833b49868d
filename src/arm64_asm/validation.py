'''
motor de validación de argumentos: formas aceptadas por cada mnemónico
'''

from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .isa import Mnemonic
from .tokens import Token, Reg, Imm, Label

class ArgKind(Enum):
    """Tipo de argumento, sin su valor concreto."""
    REG = "registro"
    IMM = "inmediato"
    LABEL = "etiqueta"

# Una forma (ArgFormat) es una secuencia ordenada de tipos
ArgFormat = Tuple[ArgKind, ...]

REG_REG_REG: ArgFormat = (ArgKind.REG, ArgKind.REG, ArgKind.REG)
REG_REG_IMM: ArgFormat = (ArgKind.REG, ArgKind.REG, ArgKind.IMM)
REG_IMM_REG: ArgFormat = (ArgKind.REG, ArgKind.IMM, ArgKind.REG)
REG_REG: ArgFormat = (ArgKind.REG, ArgKind.REG)
REG_IMM: ArgFormat = (ArgKind.REG, ArgKind.IMM)
LABEL: ArgFormat = (ArgKind.LABEL,)

# Mnemonic -> formas legales. Cada mnemónico de isa.MNEMONICS debe tener entrada.
FORMATS: Dict[Mnemonic, List[ArgFormat]] = {
    Mnemonic.ADD: [REG_REG_REG, REG_REG_IMM, REG_IMM_REG],
    Mnemonic.SUB: [REG_REG_REG, REG_REG_IMM, REG_IMM_REG],
    Mnemonic.MOV: [REG_REG, REG_IMM],
    Mnemonic.JUMP: [LABEL],
}

_TOKEN_KIND = {Reg: ArgKind.REG, Imm: ArgKind.IMM, Label: ArgKind.LABEL}

def kind_of(token: Token) -> Optional[ArgKind]:
    """Tipo de argumento del token, o None si no puede ser argumento."""
    return _TOKEN_KIND.get(type(token))

def formats(mnemonic: Mnemonic) -> List[ArgFormat]:
    """Formas registradas para el mnemónico; KeyError si no tiene ninguna."""
    if mnemonic not in FORMATS:
        raise KeyError(f"Mnemónico sin formas de argumentos registradas: {mnemonic.value}")
    return FORMATS[mnemonic]

def validate_arguments(mnemonic: Mnemonic, args: Sequence[Token]) -> bool:
    """True si los argumentos encajan, posición a posición, en alguna forma registrada.

    Lanza KeyError si el mnemónico no está en la tabla (inconsistencia interna,
    no un error del usuario).
    """
    kinds = tuple(kind_of(t) for t in args)
    return any(fmt == kinds for fmt in formats(mnemonic))

def describe(fmt: Sequence[Optional[ArgKind]]) -> str:
    """Representación legible de una forma, p.ej. 'registro, registro, inmediato'."""
    if not fmt:
        return "(sin argumentos)"
    return ", ".join(k.value if k is not None else "?" for k in fmt)
