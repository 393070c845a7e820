"""A flat buffer viewed as a row-major multi-dimensional array."""

from __future__ import annotations

from math import prod
from typing import Any, Iterable, Optional, Sequence, Union

Index = Union[int, Sequence[int]]


class NDArray:
    """Fixed-size storage addressed by tuples of indices in row-major order."""

    def __init__(self, total_size: int, shape: Optional[Iterable[int]] = None) -> None:
        if total_size < 0:
            raise ValueError(f"Size must be non-negative, but got: {total_size}")
        if shape is None:
            self.shape: tuple = (total_size,)
        else:
            self.shape = tuple(shape)
            if not self.shape:
                raise ValueError("Shape tuple is given, but zero dimensions specified")
        self.size = total_size
        self._buffer: list = [None] * total_size

    @property
    def dims(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    def __len__(self) -> int:
        return self.size

    def reshape(self, new_shape: Iterable[int]) -> None:
        """Change the shape while keeping the same number of elements."""
        shape = tuple(new_shape)
        if not shape:
            raise ValueError("Number of new dimensions must be greater than zero")
        new_size = prod(shape)
        if new_size != self.size:
            raise ValueError(
                f"New shape must contain {self.size} elements, but got shape of {new_size}"
            )
        self.shape = shape

    def offset(self, inds: Index) -> int:
        """Return the flat buffer position of the element at ``inds``."""
        indices = (inds,) if isinstance(inds, int) else tuple(inds)
        if len(indices) != self.dims:
            raise ValueError(f"Expected {self.dims} indices, but got {len(indices)}")
        position = 0
        for index, extent in zip(indices, self.shape):
            if not 0 <= index < extent:
                raise IndexError(f"Index {index} is out of range for dimension of size {extent}")
            position = position * extent + index
        return position

    def __getitem__(self, inds: Index) -> Any:
        return self._buffer[self.offset(inds)]

    def __setitem__(self, inds: Index, value: Any) -> None:
        self._buffer[self.offset(inds)] = value