"""Arithmetic circuits over graph unsigned integers: addition, subtraction, multiplication."""

from __future__ import annotations

from typing import List

from lockpick.circuit import Graph, Node
from lockpick.guint import GraphUint, copy
from lockpick.mathutil import ceil_div

# Smallest product of operand widths for which Karatsuba multiplication is used.
KARATSUBA_BOUND = 256


def _check_operands(a: GraphUint, b: GraphUint) -> None:
    if a is None:
        raise ValueError("Expected left-side operand, but got None")
    if b is None:
        raise ValueError("Expected right-side operand, but got None")
    if a.graph is None or b.graph is None:
        raise ValueError("Found operand with no associated graph")
    if a.graph is not b.graph:
        raise ValueError("Operands bounded to different graphs")


def _check_result(result: GraphUint) -> None:
    if result is None:
        raise ValueError("Expected result, but got None")


def _zeros(graph: Graph, count: int) -> List[Node]:
    return [graph.const(False) for _ in range(max(0, count))]


def _add_right_wider(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    graph = a.graph
    a_nodes, b_nodes = a.nodes(), b.nodes()
    width = result.width
    out: List[Node] = []

    carry = graph.const(False)
    common = min(a.width, width)
    for x, y in zip(a_nodes[:common], b_nodes[:common]):
        terms_part = graph.xor(x, y)
        out.append(graph.xor(terms_part, carry))
        carry = graph.or_(graph.and_(terms_part, carry), graph.and_(x, y))

    for y in b_nodes[common : min(b.width, width)]:
        out.append(graph.xor(carry, y))
        carry = graph.and_(carry, y)

    if len(out) < width:
        out.append(carry)
    else:
        graph.release_node(carry)

    out += _zeros(graph, width - len(out))
    result._store(out)


def add(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store ``a + b`` in ``result``, truncated to its width."""
    _check_operands(a, b)
    _check_result(result)
    if a.width < b.width:
        _add_right_wider(a, b, result)
    else:
        _add_right_wider(b, a, result)


def add_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a + b`` truncated to the width of ``a``."""
    _check_operands(a, b)
    graph = a.graph
    a_nodes, b_nodes = a.nodes(), b.nodes()
    common = min(a.width, b.width)
    out: List[Node] = []

    carry = graph.const(False)
    for x, y in zip(a_nodes[:common], b_nodes[:common]):
        terms_part = graph.xor(x, y)
        terms_conj = graph.and_(x, y)
        out.append(graph.xor(terms_part, carry))
        carry = graph.or_(graph.and_(terms_part, carry), terms_conj)

    for x in a_nodes[common:]:
        out.append(graph.xor(x, carry))
        carry = graph.and_(x, carry)

    graph.release_node(carry)
    a._store(out)


def sub(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store ``a - b`` modulo ``2**result.width`` in ``result``."""
    _check_operands(a, b)
    _check_result(result)
    graph = a.graph
    a_nodes, b_nodes = a.nodes(), b.nodes()
    width = result.width
    out: List[Node] = []

    carry = graph.const(False)
    common = min(a.width, b.width, width)
    for x, y in zip(a_nodes[:common], b_nodes[:common]):
        terms_part = graph.xor(x, y)
        out.append(graph.xor(terms_part, carry))
        carry = graph.or_(
            graph.and_(graph.not_(terms_part), carry),
            graph.and_(graph.not_(x), y),
        )

    if a.width < b.width:
        for y in b_nodes[common : min(b.width, width)]:
            out.append(graph.xor(y, carry))
            carry = graph.or_(y, carry)
    else:
        for x in a_nodes[common : min(a.width, width)]:
            out.append(graph.xor(x, carry))
            carry = graph.and_(graph.not_(x), carry)

    if len(out) == width:
        graph.release_node(carry)
    else:
        out += [carry] * (width - len(out))
    result._store(out)


def sub_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a - b`` modulo ``2**a.width``."""
    _check_operands(a, b)
    graph = a.graph
    a_nodes, b_nodes = a.nodes(), b.nodes()
    common = min(a.width, b.width)
    out: List[Node] = []

    carry = graph.const(False)
    for x, y in zip(a_nodes[:common], b_nodes[:common]):
        terms_part = graph.xor(x, y)
        carry_conj_part = graph.and_(graph.not_(x), y)
        out.append(graph.xor(terms_part, carry))
        carry = graph.or_(graph.and_(graph.not_(terms_part), carry), carry_conj_part)

    for x in a_nodes[common:]:
        out.append(graph.xor(x, carry))
        carry = graph.and_(graph.not_(x), carry)

    graph.release_node(carry)
    a._store(out)


def mul_school(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store ``a * b`` in ``result`` using shift-and-add multiplication."""
    _check_operands(a, b)
    _check_result(result)
    graph = a.graph
    b_nodes = b.nodes()

    result.update_from_hex_str("0")

    a_shifted = GraphUint.allocate(graph, result.width)
    b_mask = GraphUint.allocate(graph, result.width)
    for shift, b_node in enumerate(b_nodes[: result.width]):
        b_mask.fill_with_single(b_node)
        # Imported lazily to avoid a name clash with the shift helpers below.
        from lockpick.guint import and_ip, lshift

        lshift(a, shift, a_shifted)
        and_ip(a_shifted, b_mask)
        add_ip(result, a_shifted)


def _mul_ops_width(a_width: int, b_width: int) -> int:
    low, high = min(a_width, b_width), max(a_width, b_width)
    if low == 0:
        return 0
    if low == 1:
        return high
    return low + high


def _add_ops_width(a_width: int, b_width: int) -> int:
    low, high = min(a_width, b_width), max(a_width, b_width)
    return high + (1 if low else 0)


def _mul_karatsuba_left_wider(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    graph = a.graph
    width = result.width

    a_tr = GraphUint.uint_view(graph, a, 0, min(width, a.width))
    b_tr = GraphUint.uint_view(graph, b, 0, min(width, b.width))

    result.update_from_hex_str("0")

    # 'a' is at least as wide as 'b', so 'b' is implicitly padded to its width.
    # The lower halve is the wider one.
    halve_width = ceil_div(a_tr.width, 2)

    a0 = GraphUint.uint_view(graph, a_tr, 0, halve_width)
    a1 = GraphUint.uint_view(graph, a_tr, halve_width)

    b0_width = min(halve_width, b_tr.width)
    b0 = GraphUint.uint_view(graph, b_tr, 0, b0_width)
    b1 = GraphUint.uint_view(graph, b_tr, b0_width)

    z0 = GraphUint.allocate(graph, min(width, _mul_ops_width(a0.width, b0.width)))
    mul(a0, b0, z0)

    z1_width = min(
        width - halve_width,
        _add_ops_width(_mul_ops_width(a0.width, b1.width), _mul_ops_width(a1.width, b0.width)),
    )

    z2 = GraphUint.allocate(graph, min(z1_width, _mul_ops_width(a1.width, b1.width)))
    mul(a1, b1, z2)

    a_sum = GraphUint.allocate(graph, min(z1_width, _add_ops_width(a0.width, a1.width)))
    add(a0, a1, a_sum)

    b_sum = GraphUint.allocate(graph, min(z1_width, _add_ops_width(b0.width, b1.width)))
    if b1.width > 0:
        add(b0, b1, b_sum)
    else:
        copy(b_sum, b0)

    # z1 = (a0 + a1) * (b0 + b1) - z2 - z0
    z1 = GraphUint.allocate(graph, z1_width)
    mul(a_sum, b_sum, z1)
    sub_ip(z1, z2)
    sub_ip(z1, z0)

    add_ip(GraphUint.uint_view(graph, result, 0), z0)
    add_ip(GraphUint.uint_view(graph, result, halve_width), z1)
    add_ip(GraphUint.uint_view(graph, result, min(width, halve_width * 2)), z2)


def mul_karatsuba(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store ``a * b`` in ``result`` using Karatsuba multiplication."""
    _check_operands(a, b)
    _check_result(result)
    if a.width <= 1 or b.width <= 1:
        raise ValueError("Can't run Karatsuba multiplication on such narrow numbers.")
    if a.width > b.width:
        _mul_karatsuba_left_wider(a, b, result)
    else:
        _mul_karatsuba_left_wider(b, a, result)


def is_mul_karatsuba(a_width: int, b_width: int, result_width: int) -> bool:
    """Whether operands of these widths are wide enough for Karatsuba multiplication."""
    return a_width * b_width >= KARATSUBA_BOUND and result_width >= 4


def mul(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store ``a * b`` in ``result``, choosing the algorithm by operand widths."""
    _check_operands(a, b)
    _check_result(result)
    if is_mul_karatsuba(a.width, b.width, result.width):
        mul_karatsuba(a, b, result)
    else:
        mul_school(a, b, result)


def mul_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a * b`` truncated to the width of ``a``."""
    _check_operands(a, b)
    result = GraphUint.allocate(a.graph, a.width)
    mul(a, b, result)
    copy(a, result)