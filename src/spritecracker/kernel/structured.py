from abc import ABC
from typing import ClassVar, Self

import numpy as np
from numpy.typing import NDArray

ArrayBuffer = NDArray[np.uint8] | memoryview | bytes | bytearray


class StructuredTuple(ABC):
    """Fixed-size record viewed through a numpy structured dtype."""

    __slots__ = ('_header',)
    dtype: ClassVar[np.dtype]

    def __init__(self, header: np.void) -> None:
        self._header = header

    @classmethod
    def itemsize(cls) -> int:
        return cls.dtype.itemsize

    @classmethod
    def from_buffer(cls, buffer: ArrayBuffer) -> Self:
        header = np.frombuffer(buffer, dtype=cls.dtype, count=1)[0]
        return cls(header)

    def __getitem__(self, name: str) -> int:
        return int(self._header[name])

    def __bytes__(self) -> bytes:
        return self._header.tobytes()

    def asdict(self) -> dict[str, int]:
        assert self.dtype.names
        return {
            name: self[name]
            for name in self.dtype.names
            if not name.startswith('_')
        }

    def __repr__(self) -> str:
        fields = ', '.join(f'{key}={val}' for key, val in self.asdict().items())
        return f'{type(self).__name__}({fields})'
