'''
enum de registros X/W, tabla de nombres y búsqueda
'''

from __future__ import annotations
from enum import Enum
from typing import Dict

# 32 registros de 64 bits (x1..x32) y sus vistas de 32 bits (w1..w32)
REG_COUNT = 32

Register = Enum(
    "Register",
    [f"X{n}" for n in range(1, REG_COUNT + 1)] + [f"W{n}" for n in range(1, REG_COUNT + 1)],
)
Register.__doc__ = "Registro de la máquina (ancho X de 64 bits o W de 32 bits)."

# Tabla de nombres literales -> Register; solo minúsculas, búsqueda exacta
NAME_TO_REG: Dict[str, Register] = {r.name.lower(): r for r in Register}

def lookup_reg(token: str) -> Register:
    """Devuelve el Register correspondiente o lanza ValueError."""
    try:
        return NAME_TO_REG[token]
    except KeyError:
        raise ValueError(f"Registro inválido: {token}") from None
