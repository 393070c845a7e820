# lockpick

Build Boolean circuits that compute unsigned integer arithmetic, then evaluate them.

A `Graph` holds input nodes, output slots and the logic gates between them. Gates
are made with `and_`, `or_`, `xor` and `not_`, and constants with `const`. A
`GraphUint` is a fixed-width view over a run of node slots, least significant bit
first. The arithmetic and bitwise functions connect gates between `GraphUint`
operands. You get addition, subtraction, multiplication (schoolbook or Karatsuba,
picked by operand widths), bitwise operations and shifts. Every result is
truncated to the width of the result operand.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from lockpick.circuit import Graph
from lockpick.guint import GraphUint
from lockpick import garith

graph = Graph("mul", 16, 16)
a = GraphUint.buffer_view(graph, graph.inputs, 8)
b = GraphUint.buffer_view(graph, graph.inputs[8:], 8)
product = GraphUint.buffer_view(graph, graph.outputs, 16)

garith.mul(a, b, product)

a.assign_from_hex_str("1f")
b.assign_from_hex_str("0a")
graph.compute()
print(product.to_hex())   # "136"
```

You connect the circuit once. After that you can assign new input values and
call `compute()` as often as you like. `compute()` also returns the values of
the output slots as a tuple, with `None` for any slot that is empty.

## Modules

- `lockpick.circuit`: `Graph`, `Node` and `NodeOp`. This is the gate graph: it
  creates and evaluates nodes, checks that a node belongs to the graph (`owns`),
  and releases nodes that nothing depends on (`release_node`).
- `lockpick.guint`: `GraphUint`. It offers `allocate`, `buffer_view`,
  `uint_view`, filling from nodes, hex strings, integers or random bits, and
  `to_hex`. The module also has `copy`, `and_`, `or_`, `xor`, `lshift`,
  `rshift`, each with an in-place `_ip` form.
- `lockpick.garith`: `add`, `sub`, `mul` and their in-place forms, plus
  `mul_school`, `mul_karatsuba` and `is_mul_karatsuba`.
- `lockpick.htable`: `HashTable`. It is an open-addressing table that takes
  user-supplied hash and equality functions. It grows and shrinks with its
  load, and `for_elements` creates a table sized for a given number of entries.
- `lockpick.ndarray`: `NDArray`. It is a fixed-size flat buffer addressed
  through a row-major shape that you can change with `reshape`.
- `lockpick.slist`: `ListNode` and helpers for a singly linked list
  (`insert_after`, `push_head`, `remove`, `remove_head`, `iterate`).
- `lockpick.mathutil`: `ceil_div`, `pow_u64`, `floor_log2`, `ceil_log2`.
- `lockpick.logger`: `Logger` and `LogLevel`.
  - The entry format is built from wildcards: `%H`, `%M`, `%s`, `%d`, `%m`,
    `%y`, `%L`, `%u` and `%%`. The default is `[%H:%M:%s] %L: %u`. A malformed
    format raises `LogFormatError`.
  - `init` creates the package-wide logger and `get_logger` returns it.

## What it does not do

Circuits are evaluated in Python, one node at a time, by `Graph.compute`. The
package has no command-line tool. It does not run circuits on GPUs or other
accelerators, and it does not compile graphs into a separate inference form.