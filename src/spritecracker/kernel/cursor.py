import struct

from spritecracker.kernel.structured import ArrayBuffer

UINT8 = struct.Struct('<B')
UINT16LE = struct.Struct('<H')
INT16LE = struct.Struct('<h')
UINT32LE = struct.Struct('<I')
INT32LE = struct.Struct('<i')


class BufferUnderrunError(Exception):
    def __init__(self, offset: int, size: int, available: int) -> None:
        super().__init__(
            f'read of {size} bytes at offset {offset} runs past end of buffer'
            f' ({available} bytes available)'
        )
        self.offset = offset
        self.size = size
        self.available = available


class TextDecodeError(Exception):
    def __init__(self, offset: int, reason: str) -> None:
        super().__init__(f'invalid UTF-8 text at offset {offset}: {reason}')
        self.offset = offset
        self.reason = reason


class ByteCursor:
    """Sequential little-endian reader over an immutable buffer.

    Every typed read advances the offset by exactly its width.
    The `peek_*` variants read at an absolute offset and leave it untouched.
    """

    __slots__ = ('buffer', 'offset')

    def __init__(self, buffer: ArrayBuffer, offset: int = 0) -> None:
        self.buffer = memoryview(buffer).cast('B')
        self.offset = offset

    def __len__(self) -> int:
        return len(self.buffer)

    @property
    def remaining(self) -> int:
        return len(self.buffer) - self.offset

    def _check(self, offset: int, size: int) -> None:
        if size < 0 or offset < 0 or offset + size > len(self.buffer):
            raise BufferUnderrunError(offset, size, max(len(self.buffer) - offset, 0))

    def _unpack(self, fmt: struct.Struct) -> int:
        value = self.peek(fmt, self.offset)
        self.offset += fmt.size
        return value

    def peek(self, fmt: struct.Struct, offset: int) -> int:
        self._check(offset, fmt.size)
        return fmt.unpack_from(self.buffer, offset)[0]

    def peek_u16(self, offset: int) -> int:
        return self.peek(UINT16LE, offset)

    def peek_u32(self, offset: int) -> int:
        return self.peek(UINT32LE, offset)

    def read_u8(self) -> int:
        return self._unpack(UINT8)

    def read_u16(self) -> int:
        return self._unpack(UINT16LE)

    def read_i16(self) -> int:
        return self._unpack(INT16LE)

    def read_u32(self) -> int:
        return self._unpack(UINT32LE)

    def read_i32(self) -> int:
        return self._unpack(INT32LE)

    def read_fixed(self) -> float:
        # 16.16 fixed point
        return self._unpack(INT32LE) / 0x10000

    def read_view(self, size: int) -> memoryview:
        self._check(self.offset, size)
        view = self.buffer[self.offset : self.offset + size]
        self.offset += size
        return view

    def read_bytes(self, size: int) -> bytes:
        return self.read_view(size).tobytes()

    def read_string(self) -> str:
        size = self.read_u16()
        offset = self.offset
        try:
            return self.read_view(size).tobytes().decode('utf-8')
        except UnicodeDecodeError as exc:
            raise TextDecodeError(offset, exc.reason) from exc

    def skip(self, size: int) -> None:
        self._check(self.offset, size)
        self.offset += size
