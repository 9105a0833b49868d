'''
clase Diagnostic, tipos de error y excepción AsmError
'''

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

# Familia del error: léxico (tokenize), estructural (parse) o interno (tablas inconsistentes)
ErrorKind = Literal["lexico", "estructural", "interno"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna),
    un mensaje de ayuda (pista) para orientar la corrección, la familia del error
    y el texto literal que lo provocó.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    kind: Optional[ErrorKind] = None
    text: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None,
          kind: ErrorKind | None = None, text: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file, kind, text)

def warning(message: str, *, line: int | None = None, col: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, col, hint, file)


class AsmError(ValueError):
    """Error fatal de ensamblado; transporta el Diagnostic que lo describe."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic

    @classmethod
    def lexical(cls, message: str, *, line: int, col: int | None = None,
                text: str | None = None, hint: str | None = None) -> "AsmError":
        return cls(error(message, line=line, col=col, kind="lexico", text=text, hint=hint))

    @classmethod
    def structural(cls, message: str, *, line: int | None, text: str | None = None,
                   hint: str | None = None) -> "AsmError":
        return cls(error(message, line=line, kind="estructural", text=text, hint=hint))

    @classmethod
    def internal(cls, message: str, *, line: int | None = None,
                 text: str | None = None) -> "AsmError":
        return cls(error(message, line=line, kind="interno", text=text))

    def with_file(self, file: str | None) -> Diagnostic:
        """Devuelve el diagnóstico con el nombre de archivo rellenado."""
        if file is None or self.diagnostic.file is not None:
            return self.diagnostic
        return replace(self.diagnostic, file=file)
