"""Unsigned integers represented as little-endian vectors of circuit nodes."""

from __future__ import annotations

import random
from typing import Iterable, List, MutableSequence, Optional

from lockpick.circuit import Graph, Node

_HEX_DIGITS = "0123456789abcdef"
BITS_PER_HEX = 4


def _hex_digit_value(char: str) -> Optional[int]:
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    return None


class GraphUint:
    """A window of ``width`` node slots; bit 0 is the least significant."""

    __slots__ = ("graph", "width", "_buffer", "_offset")

    def __init__(
        self,
        graph: Graph,
        buffer: MutableSequence[Optional[Node]],
        offset: int,
        width: int,
    ) -> None:
        if graph is None:
            raise ValueError("Expected graph, but got None")
        if width < 0 or offset < 0 or offset + width > len(buffer):
            raise ValueError("Nodes buffer is too short for the requested width")
        self.graph = graph
        self.width = width
        self._buffer = buffer
        self._offset = offset

    @classmethod
    def allocate(cls, graph: Graph, width: int) -> "GraphUint":
        """Create a uint with its own buffer of empty slots, meant for results."""
        return cls(graph, [None] * width, 0, width)

    @classmethod
    def buffer_view(
        cls, graph: Graph, nodes: MutableSequence[Optional[Node]], width: int
    ) -> "GraphUint":
        """Create a uint viewing the first ``width`` slots of ``nodes`` in place."""
        if nodes is None:
            raise ValueError("Expected nodes buffer, but got None")
        return cls(graph, nodes, 0, width)

    @classmethod
    def uint_view(
        cls, graph: Graph, other: "GraphUint", offset: int, width: Optional[int] = None
    ) -> "GraphUint":
        """Create a uint viewing bits ``offset`` onwards of ``other``; None means to its end."""
        if other is None:
            raise ValueError("Expected uint value to set view on, but got None")
        if offset < 0 or offset > other.width or (
            width is not None and (width < 0 or other.width < width + offset)
        ):
            raise ValueError("Can't set view on specified uint with requested offset and width")
        if width is None:
            width = other.width - offset
        return cls(graph, other._buffer, other._offset + offset, width)

    def nodes(self) -> List[Optional[Node]]:
        """Return the nodes currently in the slots, least significant first."""
        return list(self._buffer[self._offset : self._offset + self.width])

    def _store(self, nodes: List[Optional[Node]]) -> None:
        self._buffer[self._offset : self._offset + self.width] = nodes

    def __len__(self) -> int:
        return self.width

    def __getitem__(self, index: int) -> Optional[Node]:
        return self._buffer[self._offset + range(self.width)[index]]

    def __setitem__(self, index: int, node: Optional[Node]) -> None:
        self._buffer[self._offset + range(self.width)[index]] = node

    def update_from_nodes(self, nodes: Iterable[Node]) -> None:
        """Copy the first ``width`` nodes of ``nodes`` into the slots."""
        if nodes is None:
            raise ValueError("Expected nodes buffer, but got None")
        new_nodes = list(nodes)[: self.width]
        if len(new_nodes) < self.width:
            raise ValueError("Nodes buffer is shorter than the uint width")
        for index, node in enumerate(new_nodes):
            if not self.graph.owns(node):
                raise ValueError(
                    f"Node inside buffer at index '{index}' does not belong to the graph "
                    "given value bounded with"
                )
        self._store(new_nodes)

    def fill_with_single(self, node: Node) -> None:
        """Put ``node`` into every slot."""
        if not self.graph.owns(node):
            raise ValueError("Specified node does not belong to the graph given value bounded with")
        self._store([node] * self.width)

    def update_empty(self) -> None:
        """Clear every slot."""
        self._store([None] * self.width)

    def update_from_hex_str(self, hex_str: str) -> None:
        """Fill the slots with fresh constants holding the value of ``hex_str``."""
        if hex_str is None:
            raise ValueError("Expected hex-string, but got None")
        self._store([self.graph.const(False) for _ in range(self.width)])
        self.assign_from_hex_str(hex_str)

    def _checked_nodes(self) -> List[Node]:
        nodes = self.nodes()
        if any(node is None for node in nodes):
            raise ValueError("Uint contains empty node slots")
        return nodes

    def update_from_int(self, value: int) -> None:
        """Set the values of the current nodes to the bits of ``value``; excess bits are dropped."""
        if value < 0:
            raise ValueError(f"Value must be non-negative, but got: {value}")
        for bit, node in enumerate(self._checked_nodes()):
            node.value = bool((value >> bit) & 1)

    def assign_from_hex_str(self, hex_str: str) -> None:
        """Set the values of the current nodes from ``hex_str``; only digits that fit are read."""
        if hex_str is None:
            raise ValueError("Expected hex-string, but got None")
        nodes = self._checked_nodes()
        upper_bound = min(self.width, len(hex_str) * BITS_PER_HEX)
        for hex_i, char in enumerate(reversed(hex_str)):
            base_bit = hex_i * BITS_PER_HEX
            if base_bit >= upper_bound:
                break
            digit = _hex_digit_value(char)
            if digit is None:
                raise ValueError(f"Unexpected character '{char}' inside hex-string")
            for bit_offset in range(min(BITS_PER_HEX, upper_bound - base_bit)):
                nodes[base_bit + bit_offset].value = bool((digit >> bit_offset) & 1)
        for node in nodes[upper_bound:]:
            node.value = False

    def assign_from_rand(self, rng: Optional[random.Random] = None) -> None:
        """Set the values of the current nodes to random bits drawn from ``rng``."""
        source = rng if rng is not None else random
        for node in self._checked_nodes():
            node.value = bool(source.getrandbits(1))

    def to_hex(self) -> str:
        """Return the current value as a lower-case hex string without leading zeros."""
        value = 0
        for bit, node in enumerate(self.nodes()):
            if not self.graph.owns(node):
                raise ValueError("Specified node does not belong to the given graph")
            if node.value:
                value |= 1 << bit
        return format(value, "x")


def _check_same_graph(a: GraphUint, b: GraphUint) -> None:
    if a is None or b is None:
        raise ValueError("Expected operand, but got None")
    if a.graph is None or b.graph is None:
        raise ValueError("Found operand with no associated graph")
    if a.graph is not b.graph:
        raise ValueError("Operands bounded to different graphs")


def _zeros(graph: Graph, count: int) -> List[Node]:
    return [graph.const(False) for _ in range(max(0, count))]


def copy(dest: GraphUint, src: GraphUint) -> None:
    """Copy the nodes of ``src`` into ``dest``, zero-extending or truncating."""
    _check_same_graph(dest, src)
    common = min(dest.width, src.width)
    dest._store(src.nodes()[:common] + _zeros(dest.graph, dest.width - common))


def _bitwise(a: GraphUint, b: GraphUint, result: GraphUint, gate, keep_tail: bool) -> None:
    _check_same_graph(a, b)
    if result is None:
        raise ValueError("Expected result, but got None")
    graph = a.graph
    narrow, wide = (a, b) if a.width < b.width else (b, a)
    narrow_nodes, wide_nodes = narrow.nodes(), wide.nodes()
    common = min(narrow.width, result.width)
    out = [gate(graph, x, y) for x, y in zip(narrow_nodes[:common], wide_nodes[:common])]
    if keep_tail:
        out += wide_nodes[common : min(wide.width, result.width)]
    out += _zeros(graph, result.width - len(out))
    result._store(out)


def _bitwise_ip(a: GraphUint, b: GraphUint, gate) -> List[Node]:
    _check_same_graph(a, b)
    graph = a.graph
    a_nodes = a.nodes()
    common = min(a.width, b.width)
    return [gate(graph, x, y) for x, y in zip(a_nodes[:common], b.nodes()[:common])] + a_nodes[
        common:
    ]


def and_(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store the bitwise conjunction of ``a`` and ``b`` in ``result``."""
    _bitwise(a, b, result, Graph.and_, keep_tail=False)


def and_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a & b``."""
    nodes = _bitwise_ip(a, b, Graph.and_)
    common = min(a.width, b.width)
    a._store(nodes[:common] + _zeros(a.graph, a.width - common))


def or_(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store the bitwise disjunction of ``a`` and ``b`` in ``result``."""
    _bitwise(a, b, result, Graph.or_, keep_tail=True)


def or_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a | b`` truncated to the width of ``a``."""
    a._store(_bitwise_ip(a, b, Graph.or_))


def xor(a: GraphUint, b: GraphUint, result: GraphUint) -> None:
    """Store the bitwise exclusive or of ``a`` and ``b`` in ``result``."""
    _bitwise(a, b, result, Graph.xor, keep_tail=True)


def xor_ip(a: GraphUint, b: GraphUint) -> None:
    """Replace ``a`` with ``a ^ b`` truncated to the width of ``a``."""
    a._store(_bitwise_ip(a, b, Graph.xor))


def _check_shift(shift: int) -> None:
    if shift < 0:
        raise ValueError(f"Shift must be non-negative, but got: {shift}")


def lshift(a: GraphUint, shift: int, result: GraphUint) -> None:
    """Store ``a << shift`` in ``result``, dropping bits beyond its width."""
    if a is None or result is None:
        raise ValueError("Expected uint operand and result, but got None")
    _check_shift(shift)
    graph = a.graph
    shift = min(shift, result.width)
    a_nodes = a.nodes()
    kept = a_nodes[: max(0, result.width - shift)]
    out = _zeros(graph, shift) + kept
    out += _zeros(graph, result.width - len(out))
    result._store(out)


def lshift_ip(a: GraphUint, shift: int) -> None:
    """Replace ``a`` with ``a << shift`` truncated to its width."""
    if a is None:
        raise ValueError("Expected uint operand, but got None")
    _check_shift(shift)
    shift = min(shift, a.width)
    a._store(_zeros(a.graph, shift) + a.nodes()[: a.width - shift])


def rshift(a: GraphUint, shift: int, result: GraphUint) -> None:
    """Store ``a >> shift`` in ``result``."""
    if a is None or result is None:
        raise ValueError("Expected uint operand and result, but got None")
    _check_shift(shift)
    shift = min(shift, a.width)
    out = a.nodes()[shift:][: result.width]
    out += _zeros(a.graph, result.width - len(out))
    result._store(out)


def rshift_ip(a: GraphUint, shift: int) -> None:
    """Replace ``a`` with ``a >> shift``."""
    if a is None:
        raise ValueError("Expected uint operand, but got None")
    _check_shift(shift)
    shift = min(shift, a.width)
    a._store(a.nodes()[shift:] + _zeros(a.graph, shift))