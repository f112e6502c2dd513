import pytest
from src.grumpy_asm.parser import (
    parse, parse_pinstr, parse_instr, parse_value, parse_u32, parse_unop, parse_binop,
)
from src.grumpy_asm.ast import PLabel, PPush, PI
from src.grumpy_asm.isa import (
    Vunit, Vi32, Vbool, Vloc, Vundef, Unop, Binop,
    Push, Pop, Peek, Unary, Binary, Swap, Alloc, Set, Get,
    Var, Store, SetFrame, Call, Ret, Branch, Halt,
)
from src.grumpy_asm.diagnostics import ParseError

# --- valores ---
@pytest.mark.parametrize("tok, val", [
    ("tt", Vunit()),
    ("undef", Vundef()),
    ("true", Vbool(True)),
    ("false", Vbool(False)),
    ("0", Vi32(0)),
    ("-2147483648", Vi32(-2147483648)),
    ("2147483647", Vi32(2147483647)),
    ("+12", Vi32(12)),
    ("2147483648", Vloc(2147483648)),
    ("4294967295", Vloc(4294967295)),
])
def test_parse_value(tok, val):
    assert parse_value(tok) == val

@pytest.mark.parametrize("tok", ["4294967296", "-2147483649", "0x10", "1_000", "abc", "True", ""])
def test_parse_value_invalid(tok):
    with pytest.raises(ParseError):
        parse_value(tok)

def test_parse_u32_and_ops():
    assert parse_u32("45") == 45
    for bad in ("-1", "4294967296", "x"):
        with pytest.raises(ParseError):
            parse_u32(bad)
    assert parse_unop("neg") is Unop.NEG
    assert [parse_binop(t) for t in ("+", "*", "-", "/", "<", "==")] == \
        [Binop.ADD, Binop.MUL, Binop.SUB, Binop.DIV, Binop.LT, Binop.EQ]
    with pytest.raises(ParseError):
        parse_unop("not")
    with pytest.raises(ParseError):
        parse_binop("=")

# --- instrucciones ---
def test_parse_instr_examples():
    assert parse_instr("push 123") == Push(Vi32(123))
    assert parse_instr("push 700") == Push(Vi32(700))
    assert parse_instr("  peek   3 ") == Peek(3)
    assert parse_instr("binary ==") == Binary(Binop.EQ)
    assert parse_instr("halt") == Halt()

@pytest.mark.parametrize("line, fragment", [
    ("jmp", "desconocida"),
    ("PUSH 1", "desconocida"),
    ("push", "falta el operando"),
    ("push 1 2", "sobran operandos"),
    ("halt now", "no lleva operandos"),
    ("peek -1", "sin signo"),
    ("var 4294967296", "fuera de rango"),
    ("unary !", "unario"),
    ("binary %", "binario"),
])
def test_parse_instr_errors(line, fragment):
    with pytest.raises(ParseError) as ei:
        parse_instr(line)
    assert fragment in ei.value.message

# --- pseudo-instrucciones ---
def test_pinstr_classification():
    assert parse_pinstr("push Lend") == PPush("Lend")
    assert parse_pinstr("push _Lx") == PPush("_Lx")
    assert parse_pinstr("push tt") == PI(Push(Vunit()))
    assert parse_pinstr("Labc123:") == PLabel("Labc123")
    assert parse_pinstr("call") == PI(Call())

def test_pinstr_label_errors():
    with pytest.raises(ParseError):
        parse_pinstr("Lx: halt")
    with pytest.raises(ParseError) as ei:
        parse_pinstr("loop:")
    assert "Etiqueta inválida" in ei.value.message
    # 'push loop' no es etiqueta ni valor
    with pytest.raises(ParseError):
        parse_pinstr("push loop")

NATIVE = [Push(Vi32(123)), Push(Vi32(-5)), Push(Vunit()), Push(Vundef()), Push(Vbool(True)),
          Push(Vbool(False)), Push(Vloc(3000000000)), Pop(), Peek(45), Unary(Unop.NEG),
          Binary(Binop.LT), Binary(Binop.DIV), Swap(), Alloc(), Set(), Get(), Var(65),
          Store(5), SetFrame(2), Call(), Ret(), Branch(), Halt()]

@pytest.mark.parametrize("p", [PLabel("Ltest"), PPush("Ltest"), PLabel("_L0")] + [PI(i) for i in NATIVE],
                         ids=str)
def test_text_round_trip(p):
    assert parse_pinstr(str(p)) == p

# --- programa completo ---
def test_parse_program_lines_and_blank():
    src = "push Lend\n\n  push 1\nLend:\nhalt\n"
    nodes, diags = parse(src)
    assert not diags
    assert nodes == [PPush("Lend"), PI(Push(Vi32(1))), PLabel("Lend"), PI(Halt())]
    assert [n.line for n in nodes] == [1, 3, 4, 5]
    assert nodes[1].col == 3

def test_parse_collects_all_errors():
    src = "push 1\nfoo\npush\nhalt\n"
    nodes, diags = parse(src, filename="bad.s")
    assert len(nodes) == 2
    assert [d.line for d in diags] == [2, 3]
    assert all(d.severity == "error" and d.file == "bad.s" for d in diags)

def test_push_label_with_colon_is_error():
    with pytest.raises(ParseError):
        parse_pinstr("push Lx:")
    nodes, diags = parse("push Lx:\nhalt\n")
    assert nodes == [PI(Halt())]
    assert [d.line for d in diags] == [1]

def test_parse_crlf_lines():
    nodes, diags = parse("Lstart:\r\npush 1\r\n\r\nhalt\r\n")
    assert not diags
    assert nodes == [PLabel("Lstart"), PI(Push(Vi32(1))), PI(Halt())]
    assert [n.line for n in nodes] == [1, 2, 4]

@pytest.mark.parametrize("sep", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\r"])
def test_only_lf_ends_a_line(sep):
    # el separador queda dentro de la línea: 'pop' sobra como operando
    nodes, diags = parse(f"push 1{sep}pop\nhalt\n")
    assert nodes == [PI(Halt())]
    assert [(d.line, d.severity) for d in diags] == [(1, "error")]
    assert nodes[0].line == 2
