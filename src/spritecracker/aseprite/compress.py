import zlib

from spritecracker.aseprite.errors import DecompressionFailure
from spritecracker.kernel.structured import ArrayBuffer


def decompress(data: ArrayBuffer) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise DecompressionFailure(f'invalid zlib stream: {exc}') from exc
