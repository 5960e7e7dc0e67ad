import pytest

from miratope.cd import (
    CdParseError,
    InvalidEdge,
    InvalidSymbol,
    MismatchedParenthesis,
    Node,
    RepeatEdge,
    UnexpectedEnding,
)
from miratope.coxeter import Cox
from miratope.parse import CdBuilder, parse_cd, parse_cox


def x():
    return Node.ringed(1.0)


def o():
    return Node.unringed()


def s():
    return Node.snub(1.0)


def check(diagram, nodes, matrix):
    cd = parse_cd(diagram)
    assert cd.nodes() == nodes
    assert cd.cox() == Cox(matrix)


@pytest.mark.parametrize("n", range(2, 10))
def test_i2(n):
    nf = float(n)
    check(f"x{n}x", [x(), x()], [[1.0, nf], [nf, 1.0]])


def test_a3():
    check(
        "x3o3x",
        [x(), o(), x()],
        [[1.0, 3.0, 2.0], [3.0, 1.0, 3.0], [2.0, 3.0, 1.0]],
    )


def test_e6():
    check(
        "x3o3o3o3o *c3o",
        [x(), o(), o(), o(), o(), o()],
        [
            [1.0, 3.0, 2.0, 2.0, 2.0, 2.0],
            [3.0, 1.0, 3.0, 2.0, 2.0, 2.0],
            [2.0, 3.0, 1.0, 3.0, 2.0, 3.0],
            [2.0, 2.0, 3.0, 1.0, 3.0, 2.0],
            [2.0, 2.0, 2.0, 3.0, 1.0, 2.0],
            [2.0, 2.0, 3.0, 2.0, 2.0, 1.0],
        ],
    )


def test_star():
    check(
        "x3o3o3o3o3*a *a3*c3*e3*b3*d3*a",
        [x(), o(), o(), o(), o()],
        [
            [1.0, 3.0, 3.0, 3.0, 3.0],
            [3.0, 1.0, 3.0, 3.0, 3.0],
            [3.0, 3.0, 1.0, 3.0, 3.0],
            [3.0, 3.0, 3.0, 1.0, 3.0],
            [3.0, 3.0, 3.0, 3.0, 1.0],
        ],
    )


def test_snubs():
    check(
        "s4s3o4o",
        [s(), s(), o(), o()],
        [
            [1.0, 4.0, 2.0, 2.0],
            [4.0, 1.0, 3.0, 2.0],
            [2.0, 3.0, 1.0, 4.0],
            [2.0, 2.0, 4.0, 1.0],
        ],
    )


def test_shortchords():
    check(
        "v4x3F4f",
        [Node.from_char("v"), x(), Node.from_char("F"), Node.from_char("f")],
        [
            [1.0, 4.0, 2.0, 2.0],
            [4.0, 1.0, 3.0, 2.0],
            [2.0, 3.0, 1.0, 4.0],
            [2.0, 2.0, 4.0, 1.0],
        ],
    )


def test_virtual_nodes():
    check(
        "*a4*b3*c3*-aooxx",
        [o(), o(), x(), x()],
        [
            [1.0, 4.0, 2.0, 2.0],
            [4.0, 1.0, 3.0, 2.0],
            [2.0, 3.0, 1.0, 3.0],
            [2.0, 2.0, 3.0, 1.0],
        ],
    )


def test_spaces():
    check(
        "   x   3   o   x",
        [x(), o(), x()],
        [[1.0, 3.0, 2.0], [3.0, 1.0, 2.0], [2.0, 2.0, 1.0]],
    )


def test_node_lengths():
    check(
        "(1.0)4(2.2)3(-3.0)",
        [x(), Node.ringed(2.2), Node.ringed(-3.0)],
        [[1.0, 4.0, 2.0], [4.0, 1.0, 3.0], [2.0, 3.0, 1.0]],
    )


def test_mismatched_parenthesis():
    with pytest.raises(MismatchedParenthesis) as info:
        parse_cd("x(1.0x")
    assert info.value.pos == 6


def test_unexpected_ending():
    with pytest.raises(UnexpectedEnding) as info:
        parse_cd("x4x3x3")
    assert info.value.pos == 6


def test_invalid_symbol():
    with pytest.raises(InvalidSymbol) as info:
        parse_cd("x3\u22955o")
    assert info.value.pos == 2


def test_parse_error():
    with pytest.raises(CdParseError) as info:
        parse_cd("(1.1.1)3(2.0)")
    assert info.value.pos == 5


def test_invalid_edge():
    with pytest.raises(InvalidEdge) as info:
        parse_cd("s1/0s")
    assert (info.value.num, info.value.den, info.value.pos) == (1, 0, 3)


def test_repeat_edge():
    with pytest.raises(RepeatEdge) as info:
        parse_cd("x3x xx *c3*d *a3*b")
    assert (info.value.a, info.value.b) == (0, 1)


def test_nan_node_is_invalid_symbol():
    with pytest.raises(InvalidSymbol) as info:
        parse_cd("(NaN)3x")
    assert info.value.pos == 3


def test_underscore_in_length_is_parse_error():
    with pytest.raises(CdParseError) as info:
        parse_cd("(1_0)3x")
    assert info.value.pos == 3


def test_tab_inside_edge_is_invalid_symbol():
    with pytest.raises(InvalidSymbol) as info:
        parse_cd("x3\to")
    assert info.value.pos == 2


def test_unknown_node_character():
    with pytest.raises(InvalidSymbol) as info:
        parse_cd("x3z")
    assert info.value.pos == 2


def test_fractional_edge():
    cd = parse_cd("x5/2o")
    assert cd.edge_count() == 1
    a, b, edge = cd.edges()[0]
    assert (a, b, edge.num, edge.den) == (0, 1, 5, 2)
    assert cd.cox()[0, 1] == 2.5


def test_edge_of_two_is_not_stored():
    cd = parse_cd("x2o")
    assert cd.edge_count() == 0
    assert cd.cox() == Cox([[1.0, 2.0], [2.0, 1.0]])


def test_builder_matches_parse_cd():
    cd = CdBuilder("x4o3o").build()
    assert cd.nodes() == [x(), o(), o()]
    assert cd.cox() == Cox.b(3)


def test_parse_cox():
    assert parse_cox("o3o3o") == Cox.a(3)
    assert parse_cox("o5o3o") == Cox.h(3)