"""Intrusive singly linked list primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional


@dataclass(eq=False)
class ListNode:
    """A list entry carrying a value and a link to the next entry."""

    value: Any = None
    next: Optional["ListNode"] = None


def _require(obj: object, what: str) -> None:
    if obj is None:
        raise ValueError(f"Expected {what}, but got None")


def insert_after(pos: ListNode, entry: ListNode) -> None:
    """Link ``entry`` right after ``pos``."""
    _require(pos, "position")
    _require(entry, "entry")
    entry.next = pos.next
    pos.next = entry


def push_head(head: Optional[ListNode], entry: ListNode) -> ListNode:
    """Put ``entry`` in front of ``head`` and return the new head."""
    _require(entry, "entry")
    entry.next = head
    return entry


def remove(
    head: Optional[ListNode], entry: ListNode, prev: Optional[ListNode]
) -> Optional[ListNode]:
    """Unlink ``entry`` whose predecessor is ``prev``; return the new head."""
    _require(entry, "entry")
    if entry is head:
        return entry.next
    _require(prev, "previous entry")
    prev.next = entry.next
    return head


def remove_head(head: Optional[ListNode]) -> Optional[ListNode]:
    """Drop the first entry and return the new head."""
    _require(head, "head")
    return head.next


def iterate(head: Optional[ListNode]) -> Iterator[ListNode]:
    """Yield the entries of the list starting at ``head``."""
    node = head
    while node is not None:
        yield node
        node = node.next