import pytest

from lockpick.slist import (
    ListNode,
    insert_after,
    iterate,
    push_head,
    remove,
    remove_head,
)


def values(head):
    return [node.value for node in iterate(head)]


def build(items):
    head = None
    for item in reversed(items):
        head = push_head(head, ListNode(item))
    return head


def test_push_head_builds_in_order():
    head = build(["a", "b", "c"])
    assert values(head) == ["a", "b", "c"]


def test_iterate_empty():
    assert list(iterate(None)) == []


def test_insert_after_middle():
    head = build(["a", "c"])
    insert_after(head, ListNode("b"))
    assert values(head) == ["a", "b", "c"]


def test_insert_after_tail():
    head = build(["a"])
    insert_after(head, ListNode("z"))
    assert values(head) == ["a", "z"]


def test_remove_middle_with_prev():
    head = build(["a", "b", "c"])
    nodes = list(iterate(head))
    new_head = remove(head, nodes[1], nodes[0])
    assert new_head is head
    assert values(new_head) == ["a", "c"]


def test_remove_head_entry():
    head = build(["a", "b"])
    new_head = remove(head, head, None)
    assert values(new_head) == ["b"]


def test_remove_requires_prev_for_non_head():
    head = build(["a", "b"])
    second = head.next
    with pytest.raises(ValueError):
        remove(head, second, None)


def test_remove_head_function():
    head = build(["a", "b", "c"])
    head = remove_head(head)
    assert values(head) == ["b", "c"]


def test_remove_head_of_empty_list():
    with pytest.raises(ValueError):
        remove_head(None)


def test_insert_after_none_position():
    with pytest.raises(ValueError):
        insert_after(None, ListNode("x"))


def test_push_head_none_entry():
    with pytest.raises(ValueError):
        push_head(None, None)


def test_nodes_compare_by_identity():
    a = ListNode("x")
    b = ListNode("x")
    assert a != b
    assert a == a