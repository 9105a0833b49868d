'''
tablas de símbolos: mnemónicos y directivas soportados
'''

from __future__ import annotations
from enum import Enum
from typing import Dict

class Mnemonic(Enum):
    """Instrucciones de máquina reconocidas por el ensamblador."""
    ADD = "add"
    SUB = "sub"
    MOV = "mov"
    JUMP = "j"

class Directive(Enum):
    """Directivas del ensamblador (no generan código de máquina)."""
    GLOBAL = "global"
    DATA = "data"
    TEXT = "text"

# Nombres literales -> Mnemonic. Búsqueda exacta y sensible a mayúsculas.
# 'j' y 'jump' son sinónimos.
MNEMONICS: Dict[str, Mnemonic] = {
    "add": Mnemonic.ADD,
    "sub": Mnemonic.SUB,
    "mov": Mnemonic.MOV,
    "j": Mnemonic.JUMP,
    "jump": Mnemonic.JUMP,
}

# Nombres literales (sin el '.') -> Directive
DIRECTIVES: Dict[str, Directive] = {d.value: d for d in Directive}

def mnemonic(name: str) -> Mnemonic:
    """Devuelve el Mnemonic por nombre literal o lanza KeyError."""
    if name not in MNEMONICS:
        raise KeyError(f"Instrucción desconocida: {name}")
    return MNEMONICS[name]

def directive(name: str) -> Directive:
    """Devuelve la Directive por nombre (sin '.') o lanza KeyError."""
    if name not in DIRECTIVES:
        raise KeyError(f"Directiva desconocida: .{name}")
    return DIRECTIVES[name]
