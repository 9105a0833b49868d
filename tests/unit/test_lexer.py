import pytest
from src.arm64_asm.lexer import (
    strip_comment, label_definition, check_label_name, is_directive,
    split_mnemonic_operands, split_operands, parse_immediate, collect_labels, tokenize,
)
from src.arm64_asm.state import AssemblerState
from src.arm64_asm.tokens import Mnem, Reg, Dir, Label, Imm, Newline
from src.arm64_asm.isa import Mnemonic, Directive
from src.arm64_asm.regs import Register

def _lex(src: str):
    state = AssemblerState()
    diags = tokenize(src, state, filename="<mem>")
    assert not diags, diags
    return state.tokens

def _lex_error(src: str):
    state = AssemblerState()
    diags = tokenize(src, state)
    assert len(diags) == 1
    assert state.tokens == []
    return diags[0]

# --- strip_comment ---
@pytest.mark.parametrize("src, expected", [
    ("add x1, x2, x3 ; cmt", "add x1, x2, x3"),
    ("mov x1, x2 // trailing", "mov x1, x2"),
    ("; full comment", ""),
    ("// full comment", ""),
    ("   add x1,x2,x3   ", "add x1,x2,x3"),
    ("loop: // fin", "loop:"),
    ("", ""),
])
def test_strip_comment(src, expected):
    assert strip_comment(src) == expected

# --- label_definition / check_label_name ---
@pytest.mark.parametrize("src, name", [
    ("loop:", "loop"),
    ("_start:", "_start"),
    ("add x1, x2, x3", None),
])
def test_label_definition(src, name):
    assert label_definition(src) == name

@pytest.mark.parametrize("name", ["1abc", "", "my label", "bad-name"])
def test_check_label_name_invalid(name):
    with pytest.raises(ValueError):
        check_label_name(name)

def test_is_directive():
    assert is_directive(".text")
    assert not is_directive("add x1, x2, x3")

# --- split_mnemonic_operands / split_operands ---
@pytest.mark.parametrize("src, mn, tail", [
    ("add x1, x2, x3", "add", "x1, x2, x3"),
    ("ADD x1", "ADD", "x1"),
    ("mov", "mov", ""),
    ("add\tx1, x2", "add\tx1,", "x2"),
    ("   ", "", ""),
])
def test_split_mnemonic_operands(src, mn, tail):
    assert split_mnemonic_operands(src) == (mn, tail)

@pytest.mark.parametrize("src, expected", [
    ("x1,x2,x3", ["x1", "x2", "x3"]),
    (" x1 , x2 , #5 ", ["x1", "x2", "#5"]),
    ("loop", ["loop"]),
])
def test_split_operands(src, expected):
    assert split_operands(src) == expected

@pytest.mark.parametrize("src", ["x1,,x2", "x1,", ",x1", " , "])
def test_split_operands_vacio(src):
    with pytest.raises(ValueError):
        split_operands(src)

# --- parse_immediate ---
@pytest.mark.parametrize("src, value", [
    ("#34", 34),
    ("#0xF", 15),
    ("#0b101", 5),
    ("#-8", -8),
    ("#0", 0),
    ("#2147483647", 2**31 - 1),
    ("#010", 8),
    ("#-0x10", -16),
    ("#0X1f", 31),
    ("#-2147483648", -2**31),
])
def test_parse_immediate(src, value):
    assert parse_immediate(src) == value

@pytest.mark.parametrize("src, fragment", [
    ("#invalid", "Inmediato inválido"),
    ("#", "Inmediato inválido"),
    ("#0b2", "Inmediato inválido"),
    ("#1_000", "Inmediato inválido"),
    ("#0o17", "Inmediato inválido"),
    ("#08", "Inmediato inválido"),
    ("#12abc", "Inmediato inválido"),
    ("#0x100000000", "fuera de rango"),
    ("#-2147483649", "fuera de rango"),
])
def test_parse_immediate_errors(src, fragment):
    with pytest.raises(ValueError, match=fragment):
        parse_immediate(src)

# --- tokenize ---
def test_three_arg_mnemonic():
    assert _lex("add x1, x2, x3") == [
        Mnem(Mnemonic.ADD), Reg(Register.X1), Reg(Register.X2), Reg(Register.X3),
    ]

def test_multiple_instructions():
    assert _lex("add x1, x2, x3\nmov x1, x2") == [
        Mnem(Mnemonic.ADD), Reg(Register.X1), Reg(Register.X2), Reg(Register.X3),
        Newline(),
        Mnem(Mnemonic.MOV), Reg(Register.X1), Reg(Register.X2),
    ]

def test_simple_labels():
    toks = _lex("function:\nj function")
    assert toks == [Label("function"), Newline(), Mnem(Mnemonic.JUMP), Label("function")]
    assert toks[0] == toks[3]

def test_multiple_labels():
    assert _lex("start:\nadd x1, x2, x3\nend:") == [
        Label("start"), Newline(),
        Mnem(Mnemonic.ADD), Reg(Register.X1), Reg(Register.X2), Reg(Register.X3),
        Newline(), Label("end"),
    ]

def test_immediates():
    assert _lex("add x1, #34, #0xF") == [
        Mnem(Mnemonic.ADD), Reg(Register.X1), Imm(34), Imm(15),
    ]
    assert _lex("sub w3, w4, #0b101")[-1] == Imm(5)

def test_comentarios_y_espacios_no_cambian_tokens():
    base = _lex("add x1, x2, x3")
    assert _lex("add x1, x2, x3 // This is a comment") == base
    assert _lex("add x1, x2, x3 ; otro") == base
    assert _lex("//This is a comment\nadd x1, x2, x3") == base
    assert _lex("\t add x1, x2, #0b101   ") == _lex("add x1, x2, #0b101")

def test_lineas_vacias_no_duplican_separadores():
    toks = _lex("\nadd x1, x2, x3\n\n   ; nada\nmov x1, x2\n\n")
    assert sum(isinstance(t, Newline) for t in toks) == 1
    assert not isinstance(toks[-1], Newline)

def test_directive_sin_argumentos():
    assert _lex(".text\n.global\nmain:") == [
        Dir(Directive.TEXT), Newline(), Dir(Directive.GLOBAL), Newline(), Label("main"),
    ]

def test_forward_reference():
    state = AssemblerState()
    assert not tokenize("j end\nadd x1, x2, x3\nend:", state)
    assert state.tokens[1] == Label("end")
    assert state.tokens[1] is state.labels["end"]
    assert state.tokens[-1] == Label("end")

def test_collect_labels_ignora_nombres_invalidos():
    table = collect_labels(["a:", "1b:", ".text", "add x1, x2, x3", "  _c: // x"])
    assert set(table) == {"a", "_c"}
    assert table["_c"].line == 5

def test_line_numbers_on_tokens():
    toks = _lex("; cabecera\n\nadd x1, x2, x3\nloop:")
    assert toks[0].line == 3
    assert toks[-1].line == 4

@pytest.mark.parametrize("src, fragment", [
    ("1abc:", "empezar por una letra"),
    ("my label:", "espacios"),
    ("bad-name:", "Carácter inesperado"),
    ("foo x1, x2", "Se esperaba un mnemónico"),
    ("ADD x1, x2, x3", "Se esperaba un mnemónico"),
    ("add\tx1, x2, x3", "Se esperaba un mnemónico"),
    ("add", "Se esperaban argumentos"),
    ("add x1,, x2", "antes/después de la coma"),
    ("add x1, x2,", "antes/después de la coma"),
    ("add x99, x1, x2", "Registro inválido: x99"),
    ("add x1, x2, #0x1ffffffff", "fuera de rango"),
    ("add x1, x2, y3", "Argumento inválido: y3"),
    ("j nowhere", "Argumento inválido: nowhere"),
    (".word 4", "Directiva inválida"),
    (". text", "Directiva inválida"),
    (".text main", "directivas con argumentos"),
])
def test_errores_lexicos(src, fragment):
    d = _lex_error(src)
    assert d.severity == "error" and d.kind == "lexico"
    assert fragment in d.message
    assert d.line == 1

def test_invalid_immediate_reporta_linea_y_literal():
    state = AssemblerState()
    diags = tokenize("add x1, x2, x3\nadd x1, x2, #invalid", state, filename="t.s")
    assert len(diags) == 1
    d = diags[0]
    assert d.line == 2 and d.col == 13
    assert d.text == "#invalid" and "#invalid" in d.message
    assert d.file == "t.s"
    assert str(d).startswith("t.s:2:13: ERROR:")
    assert state.tokens == [] and state.labels == {}

def test_octal_como_en_stoi():
    assert _lex("mov x1, #010") == [Mnem(Mnemonic.MOV), Reg(Register.X1), Imm(8)]

def test_form_feed_no_desplaza_lineas():
    state = AssemblerState()
    diags = tokenize("mov x1, x2\x0c\nmov x1, #bad", state)
    assert diags[0].line == 2
    assert diags[0].text == "#bad"

def test_fin_de_linea_crlf():
    toks = _lex("mov x1, x2\r\nadd x1, x2, x3\r\n")
    assert toks[-1] == Reg(Register.X3) and toks[-1].line == 2
    assert sum(isinstance(t, Newline) for t in toks) == 1

def test_columna_del_argumento_repetido():
    state = AssemblerState()
    d = tokenize("add x1, x2, x", state)[0]
    assert d.text == "x" and d.col == 13

def test_columna_con_sangria():
    state = AssemblerState()
    d = tokenize("  mov x1, x1x", state)[0]
    assert d.text == "x1x" and d.col == 11
