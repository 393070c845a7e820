"""Boolean circuit graphs built from single-bit nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class NodeOp(Enum):
    """Kind of operation a node performs."""

    INPUT = "input"
    CONST = "const"
    AND = "and"
    OR = "or"
    XOR = "xor"
    NOT = "not"


@dataclass(eq=False)
class Node:
    """A single bit of a circuit: an input, a constant or a gate over parents."""

    op: NodeOp
    parents: Tuple["Node", ...] = field(default=(), repr=False)
    value: bool = False
    children: List["Node"] = field(default_factory=list, repr=False)

    @property
    def is_gate(self) -> bool:
        """Whether the value is derived from parents."""
        return self.op not in (NodeOp.INPUT, NodeOp.CONST)

    def evaluate(self) -> bool:
        """Recompute the value from the parents' current values."""
        values = [parent.value for parent in self.parents]
        if self.op is NodeOp.AND:
            self.value = values[0] and values[1]
        elif self.op is NodeOp.OR:
            self.value = values[0] or values[1]
        elif self.op is NodeOp.XOR:
            self.value = values[0] != values[1]
        elif self.op is NodeOp.NOT:
            self.value = not values[0]
        return self.value


class Graph:
    """A circuit with named input nodes and output slots."""

    def __init__(self, name: str, inputs_size: int, outputs_size: int) -> None:
        if inputs_size < 0 or outputs_size < 0:
            raise ValueError("Numbers of inputs and outputs must be non-negative")
        self.name = name
        self._nodes: dict = {}
        self.inputs: List[Node] = [self._add(Node(NodeOp.INPUT)) for _ in range(inputs_size)]
        self.outputs: List[Optional[Node]] = [None] * outputs_size

    @property
    def inputs_size(self) -> int:
        """Number of input nodes."""
        return len(self.inputs)

    @property
    def outputs_size(self) -> int:
        """Number of output slots."""
        return len(self.outputs)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def _add(self, node: Node) -> Node:
        self._nodes[node] = None
        return node

    def _gate(self, op: NodeOp, *parents: Node) -> Node:
        for parent in parents:
            if not self.owns(parent):
                raise ValueError("Operand node does not belong to this graph")
        node = Node(op, tuple(parents))
        node.evaluate()
        for parent in parents:
            parent.children.append(node)
        return self._add(node)

    def const(self, value: bool) -> Node:
        """Create a constant node holding ``value``."""
        return self._add(Node(NodeOp.CONST, value=bool(value)))

    def and_(self, a: Node, b: Node) -> Node:
        """Create a conjunction of ``a`` and ``b``."""
        return self._gate(NodeOp.AND, a, b)

    def or_(self, a: Node, b: Node) -> Node:
        """Create a disjunction of ``a`` and ``b``."""
        return self._gate(NodeOp.OR, a, b)

    def xor(self, a: Node, b: Node) -> Node:
        """Create an exclusive or of ``a`` and ``b``."""
        return self._gate(NodeOp.XOR, a, b)

    def not_(self, a: Node) -> Node:
        """Create a negation of ``a``."""
        return self._gate(NodeOp.NOT, a)

    def owns(self, node: Optional[Node]) -> bool:
        """Whether ``node`` belongs to this graph."""
        return node is not None and node in self._nodes

    def release_node(self, node: Node) -> None:
        """Drop a node that nothing depends on."""
        if not self.owns(node):
            raise ValueError("Node does not belong to this graph")
        if node.op is NodeOp.INPUT:
            raise ValueError("Input nodes can't be released")
        if node.children:
            raise ValueError("Node has dependent nodes and can't be released")
        if any(output is node for output in self.outputs):
            raise ValueError("Node is used as a graph output and can't be released")
        for parent in node.parents:
            parent.children.remove(node)
        node.parents = ()
        del self._nodes[node]

    def compute(self) -> Tuple[Optional[bool], ...]:
        """Propagate input and constant values; return the output values."""
        # Nodes are created after their parents, so insertion order is topological.
        for node in self._nodes:
            if node.is_gate:
                node.evaluate()
        return tuple(None if output is None else output.value for output in self.outputs)