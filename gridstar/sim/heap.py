"""Binary min-heap over a caller supplied ordering."""

from __future__ import annotations

import math
from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class Heap(Generic[T]):
    """Min-heap where ``before(a, b)`` means ``a`` pops no later than ``b``.

    Membership tests compare by equality with a linear scan, so ``contains``
    and ``index_of`` are O(n). That is fine for grids of a few hundred cells
    and the wrong tool beyond that.
    """

    def __init__(
        self, nodes: Iterable[T] = (), *, before: Callable[[T, T], bool]
    ) -> None:
        self._before = before
        self._nodes: list[T] = list(nodes)
        for index in range(len(self._nodes) // 2 - 1, -1, -1):
            self._sift_down(index)

    @property
    def size(self) -> int:
        return len(self._nodes)

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    @property
    def depth(self) -> int:
        if not self._nodes:
            return 0
        return int(math.floor(math.log2(len(self._nodes))))

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._nodes))

    def peek(self) -> T | None:
        return self._nodes[0] if self._nodes else None

    def insert(self, value: T) -> None:
        self._nodes.append(value)
        self._sift_up(len(self._nodes) - 1)

    def extract_min(self) -> T | None:
        if not self._nodes:
            return None
        last = self._nodes.pop()
        if not self._nodes:
            return last
        first = self._nodes[0]
        self._nodes[0] = last
        self._sift_down(0)
        return first

    def index_of(self, value: T) -> int | None:
        for index, node in enumerate(self._nodes):
            if node == value:
                return index
        return None

    def contains(self, value: T) -> bool:
        return self.index_of(value) is not None

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def remove_at(self, index: int) -> T | None:
        if not 0 <= index < len(self._nodes):
            return None
        last_index = len(self._nodes) - 1
        if index != last_index:
            self._swap(index, last_index)
            self._sift_down(index, end=last_index)
            self._sift_up(index)
        return self._nodes.pop()

    def remove(self, value: T) -> T | None:
        index = self.index_of(value)
        if index is None:
            return None
        return self.remove_at(index)

    def replace(self, index: int, value: T) -> None:
        if not 0 <= index < len(self._nodes):
            return
        self.remove_at(index)
        self.insert(value)

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    def _swap(self, i: int, j: int) -> None:
        self._nodes[i], self._nodes[j] = self._nodes[j], self._nodes[i]

    def _sift_up(self, index: int) -> None:
        node = self._nodes[index]
        while index > 0:
            parent = self._parent(index)
            if not self._before(node, self._nodes[parent]):
                break
            self._nodes[index] = self._nodes[parent]
            index = parent
        self._nodes[index] = node

    def _sift_down(self, index: int, *, end: int | None = None) -> None:
        end = len(self._nodes) if end is None else end
        while True:
            left = 2 * index + 1
            right = left + 1
            target = index
            if left < end and self._before(self._nodes[left], self._nodes[target]):
                target = left
            if right < end and self._before(self._nodes[right], self._nodes[target]):
                target = right
            if target == index:
                return
            self._swap(index, target)
            index = target
