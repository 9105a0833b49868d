'''
estado compartido de una pasada de ensamblado (tokens, instrucciones, etiquetas, pc)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

from .tokens import Token, Label
from .ast import Instruction

# Cada instrucción de máquina ocupa 4 bytes
INSTRUCTION_SIZE = 4

@dataclass
class AssemblerState:
    """Contexto mutable de una única pasada tokenize + parse.

    - tokens: salida del lexer
    - labels: tabla nombre -> Label que mantiene el lexer
    - instructions: salida del parser
    - label_addresses: Label -> dirección (valor del pc al definirla)
    - pc: contador de programa en bytes
    """
    tokens: List[Token] = field(default_factory=list)
    labels: Dict[str, Label] = field(default_factory=dict)
    instructions: List[Instruction] = field(default_factory=list)
    label_addresses: Dict[Label, int] = field(default_factory=dict)
    pc: int = 0

    @property
    def symtab(self) -> Dict[str, int]:
        """Vista nombre -> dirección de las etiquetas resueltas."""
        return {lab.name: addr for lab, addr in self.label_addresses.items()}
