# Copyright 2022-2026 Tommy Lau @ SLODT
#
# Licensed under the GPL License, Version 3.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.gnu.org/licenses/gpl-3.0.html
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Bounds-checked reading of OEMesh primitives.

ByteCursor is the only object that touches the input buffer. The read_*
helpers build every field type of the format on top of it.
"""

from __future__ import annotations

from typing import Any, Union

from construct import Construct

from . import oemesh_construct as records
from .constants import STRING_ENCODING
from .errors import TruncatedError
from .logging_utils import get_logger
from .types import Color, Quat, Transform, Vec2i, Vec3, Vec3i

BytesLike = Union[bytes, bytearray, memoryview]

_logger = get_logger(__name__)


class ByteCursor:
    """Sequential reader over an immutable byte buffer.

    A failed read raises TruncatedError and leaves the position unchanged.
    The buffer is held until release() is called; it is never modified.

    Example:
        cursor = ByteCursor(b'\\x01\\x02')
        cursor.read(2)
    """

    def __init__(self, data: BytesLike) -> None:
        self._data = memoryview(data).cast('B')
        self._size = len(self._data)
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def size(self) -> int:
        return self._size

    @property
    def remaining(self) -> int:
        return self._size - self._position

    def at_end(self) -> bool:
        return self._position == self._size

    def peek(self, n: int) -> bytes:
        """Get the next n bytes without moving the cursor."""
        self._check(n)
        return self._data[self._position:self._position + n].tobytes()

    def read(self, n: int) -> bytes:
        """Read the next n bytes.

        Args:
            n: Number of bytes, may be zero

        Returns:
            The bytes read

        Raises:
            TruncatedError: If fewer than n bytes remain
        """
        self._check(n)
        start = self._position
        self._position += n
        return self._data[start:self._position].tobytes()

    def release(self) -> None:
        """Drop the view of the input buffer.

        Further reads fail with ValueError. Safe to call more than once.
        """
        self._data.release()

    def _check(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"cannot read a negative number of bytes ({n})")
        if n > self.remaining:
            raise TruncatedError(self._position, n, self.remaining)


def read_fixed(cursor: ByteCursor, record: Construct) -> Any:
    """Read one fixed-size record.

    Args:
        cursor: Source cursor
        record: Construct with a static size

    Returns:
        The parsed value or Container
    """
    return record.parse(cursor.read(record.sizeof()))


def read_bool(cursor: ByteCursor) -> bool:
    return read_fixed(cursor, records.boolean)


def read_u8(cursor: ByteCursor) -> int:
    return read_fixed(cursor, records.u8)


def read_u32(cursor: ByteCursor) -> int:
    return read_fixed(cursor, records.u32)


def read_i32(cursor: ByteCursor) -> int:
    return read_fixed(cursor, records.i32)


def read_f32(cursor: ByteCursor) -> float:
    return read_fixed(cursor, records.f32)


def read_prefixed_bytes(cursor: ByteCursor) -> bytes:
    """Read a u32 length followed by that many raw bytes.

    The cursor does not move when either part is truncated.
    """
    prefix_size = records.string_length.sizeof()
    length = records.string_length.parse(cursor.peek(prefix_size))
    return cursor.read(prefix_size + length)[prefix_size:]


def read_string(cursor: ByteCursor) -> str:
    """Read a length-prefixed name.

    Undecodable bytes are replaced rather than rejected; read_prefixed_bytes
    keeps the raw value.
    """
    start = cursor.position
    data = read_prefixed_bytes(cursor)
    try:
        return data.decode(STRING_ENCODING)
    except UnicodeDecodeError as e:
        _logger.debug(f"Invalid {STRING_ENCODING} in string at offset {start}: {e.reason}")
        return data.decode(STRING_ENCODING, errors='replace')


def read_vec2i(cursor: ByteCursor) -> Vec2i:
    v = read_fixed(cursor, records.vec2i_struct)
    return Vec2i(v.x, v.y)


def read_vec3(cursor: ByteCursor) -> Vec3:
    v = read_fixed(cursor, records.vec3_struct)
    return Vec3(v.x, v.y, v.z)


def read_vec3i(cursor: ByteCursor) -> Vec3i:
    v = read_fixed(cursor, records.vec3i_struct)
    return Vec3i(v.x, v.y, v.z)


def read_quat(cursor: ByteCursor) -> Quat:
    q = read_fixed(cursor, records.quat_struct)
    return Quat(q.x, q.y, q.z, q.w)


def read_color(cursor: ByteCursor) -> Color:
    c = read_fixed(cursor, records.color_struct)
    return Color(c.r, c.g, c.b, c.a)


def to_transform(t: Any) -> Transform:
    """Convert a parsed transform_struct Container."""
    return Transform(
        translation=Vec3(t.translation.x, t.translation.y, t.translation.z),
        rotation=Quat(t.rotation.x, t.rotation.y, t.rotation.z, t.rotation.w),
        scale=Vec3(t.scale.x, t.scale.y, t.scale.z),
    )


def read_transform(cursor: ByteCursor) -> Transform:
    return to_transform(read_fixed(cursor, records.transform_struct))
