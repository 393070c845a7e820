import operator
import random

import pytest

from lockpick.circuit import Graph
from lockpick.guint import (
    GraphUint,
    and_,
    and_ip,
    copy,
    lshift,
    lshift_ip,
    or_,
    or_ip,
    rshift,
    rshift_ip,
    xor,
    xor_ip,
)


def _mask(width):
    return (1 << width) - 1


def _binary_setup(a_width, b_width, res_width):
    graph = Graph("test", a_width + b_width, res_width)
    inputs = GraphUint.buffer_view(graph, graph.inputs, a_width + b_width)
    a = GraphUint.uint_view(graph, inputs, 0, a_width)
    b = GraphUint.uint_view(graph, inputs, a_width, b_width)
    res = GraphUint.buffer_view(graph, graph.outputs, res_width)
    return graph, a, b, res


def _width_sets(seed, sets, high, count):
    rng = random.Random(seed)
    result = []
    for _ in range(sets):
        widths = [rng.randrange(high) for _ in range(count)]
        result.append(tuple(widths))
        for i in range(count):
            zeroed = list(widths)
            zeroed[i] = 0
            result.append(tuple(zeroed))
    result.append((0,) * count)
    return result


BINARY_OPS = [
    (and_, operator.and_),
    (or_, operator.or_),
    (xor, operator.xor),
]

INPLACE_OPS = [
    (and_ip, operator.and_),
    (or_ip, operator.or_),
    (xor_ip, operator.xor),
]


@pytest.mark.parametrize("width", range(1, 65))
def test_hex_round_trip(width):
    graph = Graph("test", width, width)
    value = GraphUint.buffer_view(graph, graph.inputs, width)
    rng = random.Random(width)
    for _ in range(50):
        expected = rng.getrandbits(width)
        value.update_from_int(expected)
        assert value.to_hex() == format(expected, "x")


@pytest.mark.parametrize("op,ref", BINARY_OPS)
@pytest.mark.parametrize("widths", _width_sets(1, 20, 64, 3))
def test_binary_ops(op, ref, widths):
    a_width, b_width, res_width = widths
    graph, a, b, res = _binary_setup(a_width, b_width, res_width)
    op(a, b, res)
    rng = random.Random(sum(widths))
    for _ in range(10):
        a_val = rng.getrandbits(a_width) if a_width else 0
        b_val = rng.getrandbits(b_width) if b_width else 0
        a.update_from_int(a_val)
        b.update_from_int(b_val)
        graph.compute()
        assert int(res.to_hex(), 16) == ref(a_val, b_val) & _mask(res_width)


@pytest.mark.parametrize("op,ref", INPLACE_OPS)
@pytest.mark.parametrize("widths", _width_sets(2, 20, 64, 2))
def test_inplace_ops(op, ref, widths):
    a_width, b_width = widths
    graph, a, b, res = _binary_setup(a_width, b_width, a_width)
    copy(res, a)
    op(res, b)
    rng = random.Random(a_width * 100 + b_width)
    for _ in range(10):
        a_val = rng.getrandbits(a_width) if a_width else 0
        b_val = rng.getrandbits(b_width) if b_width else 0
        a.update_from_int(a_val)
        b.update_from_int(b_val)
        graph.compute()
        assert int(res.to_hex(), 16) == ref(a_val, b_val) & _mask(a_width)


def _shift_cases(seed):
    rng = random.Random(seed)
    cases = []
    for _ in range(20):
        a_width = rng.randrange(64)
        res_width = rng.randrange(64)
        shift = rng.randrange(max(1, a_width, res_width))
        cases += [
            (a_width, shift, res_width),
            (0, shift, res_width),
            (a_width, 0, res_width),
            (a_width, shift, 0),
            (0, 0, res_width),
        ]
    cases.append((0, 0, 0))
    return cases


@pytest.mark.parametrize(
    "op,ref", [(lshift, operator.lshift), (rshift, operator.rshift)]
)
@pytest.mark.parametrize("case", _shift_cases(3))
def test_shift_ops(op, ref, case):
    a_width, shift, res_width = case
    graph = Graph("test", a_width, res_width)
    a = GraphUint.buffer_view(graph, graph.inputs, a_width)
    res = GraphUint.buffer_view(graph, graph.outputs, res_width)
    op(a, shift, res)
    rng = random.Random(a_width + shift + res_width)
    for _ in range(10):
        a_val = rng.getrandbits(a_width) if a_width else 0
        a.update_from_int(a_val)
        graph.compute()
        assert int(res.to_hex(), 16) == ref(a_val, shift) & _mask(res_width)


def _shift_ip_cases(seed):
    rng = random.Random(seed)
    cases = []
    for _ in range(20):
        a_width = rng.randrange(64)
        shift = rng.randrange(max(1, a_width))
        cases += [(a_width, shift), (0, shift), (a_width, 0)]
    cases.append((0, 0))
    return cases


@pytest.mark.parametrize(
    "op,ref", [(lshift_ip, operator.lshift), (rshift_ip, operator.rshift)]
)
@pytest.mark.parametrize("case", _shift_ip_cases(4))
def test_shift_inplace_ops(op, ref, case):
    a_width, shift = case
    graph = Graph("test", a_width, a_width)
    a = GraphUint.buffer_view(graph, graph.inputs, a_width)
    res = GraphUint.buffer_view(graph, graph.outputs, a_width)
    copy(res, a)
    op(res, shift)
    rng = random.Random(a_width * 7 + shift)
    for _ in range(10):
        a_val = rng.getrandbits(a_width) if a_width else 0
        a.update_from_int(a_val)
        graph.compute()
        assert int(res.to_hex(), 16) == ref(a_val, shift) & _mask(a_width)


def test_copy_zero_extends_and_truncates():
    graph, a, _, res = _binary_setup(4, 0, 8)
    copy(res, a)
    a.update_from_int(0xB)
    graph.compute()
    assert res.to_hex() == "b"
    graph2, a2, _, res2 = _binary_setup(8, 0, 4)
    copy(res2, a2)
    a2.update_from_int(0xAB)
    graph2.compute()
    assert res2.to_hex() == "b"


def test_update_from_hex_str_sets_constants():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 16)
    value.update_from_hex_str("1A2f")
    assert value.to_hex() == "1a2f"
    assert all(graph.owns(node) for node in value.nodes())


def test_update_from_hex_str_truncates_and_pads():
    graph = Graph("test", 0, 0)
    narrow = GraphUint.allocate(graph, 6)
    narrow.update_from_hex_str("ff")
    assert narrow.to_hex() == "3f"
    wide = GraphUint.allocate(graph, 32)
    wide.update_from_hex_str("7")
    assert wide.to_hex() == "7"


def test_assign_ignores_unread_digits():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 4)
    value.update_from_hex_str("0")
    value.assign_from_hex_str("zf")
    assert value.to_hex() == "f"


def test_assign_rejects_bad_character():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 8)
    value.update_from_hex_str("0")
    with pytest.raises(ValueError, match="Unexpected character 'g'"):
        value.assign_from_hex_str("g1")


def test_all_zero_is_single_zero():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 12)
    value.update_from_hex_str("000")
    assert value.to_hex() == "0"


def test_assign_from_rand_is_deterministic_with_seed():
    graph = Graph("test", 32, 0)
    value = GraphUint.buffer_view(graph, graph.inputs, 32)
    value.assign_from_rand(random.Random(5))
    first = value.to_hex()
    value.assign_from_rand(random.Random(5))
    assert value.to_hex() == first
    assert int(first, 16) < 1 << 32


def test_uint_view_shares_slots():
    graph = Graph("test", 8, 0)
    base = GraphUint.buffer_view(graph, graph.inputs, 8)
    high = GraphUint.uint_view(graph, base, 4)
    assert high.width == 4
    assert high[0] is graph.inputs[4]
    node = graph.const(True)
    high[1] = node
    assert graph.inputs[5] is node
    assert base[-1] is graph.inputs[7]


def test_uint_view_out_of_range():
    graph = Graph("test", 8, 0)
    base = GraphUint.buffer_view(graph, graph.inputs, 8)
    with pytest.raises(ValueError):
        GraphUint.uint_view(graph, base, 9)
    with pytest.raises(ValueError):
        GraphUint.uint_view(graph, base, 4, 5)


def test_getitem_out_of_range():
    graph = Graph("test", 2, 0)
    value = GraphUint.buffer_view(graph, graph.inputs, 2)
    with pytest.raises(IndexError):
        value[2]
    assert value[1] is graph.inputs[1]
    assert value.width == 2


def test_fill_with_single_and_update_empty():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 5)
    node = graph.const(True)
    value.fill_with_single(node)
    assert value.nodes() == [node] * 5
    assert value.to_hex() == "1f"
    value.update_empty()
    assert value.nodes() == [None] * 5


def test_to_hex_on_empty_slots_raises():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 3)
    with pytest.raises(ValueError, match="does not belong"):
        value.to_hex()


def test_foreign_nodes_rejected():
    graph = Graph("test", 0, 0)
    other = Graph("other", 0, 0)
    value = GraphUint.allocate(graph, 2)
    foreign = other.const(False)
    with pytest.raises(ValueError):
        value.fill_with_single(foreign)
    with pytest.raises(ValueError, match="index '1'"):
        value.update_from_nodes([graph.const(False), foreign])


def test_update_from_nodes_copies():
    graph = Graph("test", 0, 0)
    value = GraphUint.allocate(graph, 2)
    nodes = [graph.const(True), graph.const(False), graph.const(True)]
    value.update_from_nodes(nodes)
    assert value.nodes() == nodes[:2]
    nodes[0] = graph.const(False)
    assert value.to_hex() == "1"


def test_operands_from_different_graphs():
    g1 = Graph("a", 2, 2)
    g2 = Graph("b", 2, 0)
    a = GraphUint.buffer_view(g1, g1.inputs, 2)
    b = GraphUint.buffer_view(g2, g2.inputs, 2)
    res = GraphUint.buffer_view(g1, g1.outputs, 2)
    with pytest.raises(ValueError, match="different graphs"):
        xor(a, b, res)
    with pytest.raises(ValueError, match="different graphs"):
        and_ip(a, b)


def test_update_from_int_rejects_negative():
    graph = Graph("test", 4, 0)
    value = GraphUint.buffer_view(graph, graph.inputs, 4)
    with pytest.raises(ValueError):
        value.update_from_int(-1)


def test_or_ip_keeps_high_bits():
    graph, a, b, res = _binary_setup(8, 4, 8)
    copy(res, a)
    or_ip(res, b)
    a.update_from_int(0xA0)
    b.update_from_int(0x5)
    graph.compute()
    assert res.to_hex() == "a5"


def test_negative_shift_rejected():
    graph = Graph("test", 4, 4)
    a = GraphUint.buffer_view(graph, graph.inputs, 4)
    res = GraphUint.buffer_view(graph, graph.outputs, 4)
    with pytest.raises(ValueError):
        lshift(a, -1, res)
    with pytest.raises(ValueError):
        rshift_ip(a, -2)