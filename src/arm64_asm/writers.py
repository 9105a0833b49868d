from __future__ import annotations
from typing import Dict, Iterable, List

from .ast import Argument, Instruction, MachineInstruction, DirectiveInstruction
from .tokens import Reg, Imm, Label
from .utils import to_hex32

def format_argument(arg: Argument) -> str:
    if isinstance(arg, Reg):
        return arg.reg.name.lower()
    if isinstance(arg, Imm):
        return f"#{arg.value}"
    return arg.name

def to_listing_lines(instructions: Iterable[Instruction]) -> List[str]:
    """Una línea por instrucción: 'dirección  mnemónico args'; las etiquetas como 'nombre:'."""
    out = []
    for ins in instructions:
        if isinstance(ins, MachineInstruction):
            args = ", ".join(format_argument(a) for a in ins.arguments)
            out.append(f"{to_hex32(ins.address)}  {ins.mnemonic.value} {args}")
        elif isinstance(ins, DirectiveInstruction):
            out.append(f"            .{ins.directive.value}")
        elif isinstance(ins, Label):
            out.append(f"{ins.name}:")
    return out

def to_symbol_lines(symtab: Dict[str, int]) -> List[str]:
    return [f"{name} = {to_hex32(addr)}" for name, addr in sorted(symtab.items(), key=lambda kv: (kv[1], kv[0]))]

def write_listing(lines: Iterable[str], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
