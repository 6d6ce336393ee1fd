"""
Fixed-width big-endian packing of numbers and numeric arrays.

Used to persist feature vectors derived from attention maps. Supported
kinds: short (16 bit), int (32), long (64), float (32), double (64).
"""

import logging
from typing import IO, Iterable, List, Sequence
import numpy as np

logger = logging.getLogger(__name__)

__all__ = [
    'KINDS',
    'to_bytes',
    'from_bytes',
    'array_to_bytes',
    'bytes_to_array',
    'to_double_array',
    'double_array_to_string',
    'double_array_from_string',
    'int_array_to_string',
    'to_hex',
    'read_codebook',
    'write_codebook',
]

KINDS = {
    'short': np.dtype('>i2'),
    'int': np.dtype('>i4'),
    'long': np.dtype('>i8'),
    'float': np.dtype('>f4'),
    'double': np.dtype('>f8'),
}


def _dtype(kind: str) -> np.dtype:
    try:
        return KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown kind '{kind}'. Available: {sorted(KINDS)}") from None


def _pack(values, dt: np.dtype) -> np.ndarray:
    arr = np.asarray(values)
    if dt.kind == 'i' and arr.dtype.kind in 'iub':
        # Integers wrap around like fixed-width types
        return arr.astype(np.int64).astype(dt)
    return arr.astype(dt)


def to_bytes(value, kind: str) -> bytes:
    """Pack one number."""
    return _pack(value, _dtype(kind)).tobytes()


def from_bytes(data: bytes, kind: str):
    """Unpack one number, 0 if `data` has the wrong width for `kind`."""
    dt = _dtype(kind)
    if data is None or len(data) != dt.itemsize:
        logger.debug(f"Expected {dt.itemsize} bytes for {kind}, got {None if data is None else len(data)}")
        return 0.0 if dt.kind == 'f' else 0
    return np.frombuffer(data, dtype=dt)[0].item()


def array_to_bytes(values: Sequence, kind: str) -> bytes:
    """Pack a sequence of numbers back to back."""
    return _pack(values, _dtype(kind)).tobytes()


def bytes_to_array(data: bytes, kind: str, offset: int = 0, length: int = None) -> np.ndarray:
    """
    Unpack `length` bytes starting at `offset` into a native-order array.

    A trailing partial element is ignored.
    """
    dt = _dtype(kind)
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if length is None:
        length = len(data) - offset
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    if offset + length > len(data):
        raise ValueError(f"Range {offset}:{offset + length} exceeds buffer of {len(data)} bytes")

    count = length // dt.itemsize
    arr = np.frombuffer(data, dtype=dt, count=count, offset=offset)
    return arr.astype(dt.newbyteorder('='))


def to_double_array(values) -> np.ndarray:
    """Widen any numeric sequence to float64."""
    return np.asarray(values, dtype=np.float64)


def double_array_to_string(values: Iterable[float]) -> str:
    """Space separated text, parseable by double_array_from_string()."""
    return ' '.join(repr(float(v)) for v in values)


def double_array_from_string(text: str) -> np.ndarray:
    """Parse numbers separated by whitespace, commas, or brackets."""
    for ch in '[],':
        text = text.replace(ch, ' ')
    return np.array([float(tok) for tok in text.split()], dtype=np.float64)


def int_array_to_string(values: Iterable[int]) -> str:
    return ' '.join(str(int(v)) for v in values)


def to_hex(data: bytes) -> str:
    """Upper-case hex, one byte per token."""
    return ' '.join(f'{b:02X}' for b in data)


def read_codebook(stream: IO[str]) -> List[np.ndarray]:
    """Read one double vector per line, any whitespace between values."""
    codebook = []
    for line in stream:
        tokens = line.split()
        if tokens:
            codebook.append(np.array([float(t) for t in tokens], dtype=np.float64))
    return codebook


def write_codebook(stream: IO[str], codebook: Iterable[Sequence[float]]) -> None:
    """Write one tab separated vector per line."""
    for vector in codebook:
        stream.write('\t'.join(repr(float(v)) for v in vector))
        stream.write('\n')
