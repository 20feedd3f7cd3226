import os
from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np


@contextmanager
def map_file(file_path: str | os.PathLike[str]) -> Iterator[memoryview]:
    """Map a file read-only, exposing its bytes without copying them."""
    if not os.path.getsize(file_path):
        # numpy refuses to map empty files
        yield memoryview(b'')
        return
    data = np.memmap(file_path, dtype='u1', mode='r')
    yield memoryview(data)
