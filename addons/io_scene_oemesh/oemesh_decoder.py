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

"""OEMesh model decoder.

Layout of a model, all values little-endian:

    Model       = Signature:String Version:u8 Texture Meshes Animations
    String      = Length:u32 Bytes[Length]
    Texture     = Width:i32 Height:i32 Color[Width * Height]
    Meshes      = Count:u32 Mesh[Count]
    Mesh        = Parent:i32 Transform Origin:Vec3 Name:String
                  Size:Vec3i TexCoord:Vec2i[6]
    Animations  = Count:u32 Animation[Count]
    Animation   = Name:String FrameCount:u32 Frame[FrameCount]
    Frame       = Duration:f32 DeltaCount:u32 FrameMesh[DeltaCount]
    FrameMesh   = Transform FaceChange[6]
    FaceChange  = HasChange:bool (X:i32 Y:i32 if HasChange)

Faces are stored in FACE_NAMES order. Decoded items are attached to their
owner as soon as they exist, so releasing the model after a failure also
releases everything read before it.
"""

from __future__ import annotations

import struct
import sys
from enum import Enum
from typing import Any, Callable, Optional

from . import oemesh_construct as records
from .constants import (
    DEFAULT_IMPORT_SETTINGS,
    DEFAULT_MAX_TEXTURE_PIXELS,
    FACE_COUNT,
    NO_PARENT,
    OEMESH_SIGNATURE,
    PIXEL_SIZE,
)
from .errors import (
    AllocationError,
    DecodeCancelledError,
    InvalidHeaderError,
    InvalidReferenceError,
    InvalidTextureError,
    OEMeshError,
    SettingsError,
    TrailingDataError,
    TruncatedError,
)
from .logging_utils import get_logger
from .oemesh_cursor import (
    BytesLike,
    ByteCursor,
    read_bool,
    read_fixed,
    read_prefixed_bytes,
    read_string,
    read_transform,
    read_u32,
    read_u8,
    read_vec2i,
    read_vec3i,
    to_transform,
)
from .types import (
    Animation,
    Color,
    CoordChange,
    Frame,
    FrameMesh,
    Mesh,
    OEMeshModel,
    Texture,
    Vec3,
)

_logger = get_logger(__name__)


# ------------------------------------------------------------
# Texture
# ------------------------------------------------------------
def read_texture(cursor: ByteCursor, max_pixels: int = DEFAULT_MAX_TEXTURE_PIXELS) -> Texture:
    """Read the texture atlas.

    Args:
        cursor: Source cursor
        max_pixels: Largest accepted width * height

    Returns:
        The atlas with its pixels exactly as stored

    Raises:
        InvalidTextureError: If width or height is not positive
        AllocationError: If the atlas is larger than allowed
        TruncatedError: If the pixel data is incomplete
    """
    header = read_fixed(cursor, records.texture_header_struct)
    width, height = header.width, header.height
    if width <= 0 or height <= 0:
        raise InvalidTextureError(f"Invalid texture size {width}x{height}")

    pixel_count = width * height
    if pixel_count > max_pixels or pixel_count * PIXEL_SIZE > sys.maxsize:
        raise AllocationError(
            f"Texture of {width}x{height} exceeds the limit of {max_pixels} pixels")

    data = cursor.read(pixel_count * PIXEL_SIZE)
    pixels = [Color(*p) for p in struct.iter_unpack("<4B", data)]
    _logger.debug(f"Texture {width}x{height}")
    return Texture(width=width, height=height, pixels=pixels)


# ------------------------------------------------------------
# Meshes
# ------------------------------------------------------------
def resolve_parent(index: int, parent: int, mesh_count: int) -> Optional[int]:
    """Turn a stored parent value into a mesh index.

    Only NO_PARENT or the index of an earlier mesh is accepted, which keeps
    the hierarchy acyclic.

    Raises:
        InvalidReferenceError: For any other value
    """
    if parent == NO_PARENT:
        return None
    if 0 <= parent < index:
        return parent
    raise InvalidReferenceError(index, parent, mesh_count)


def read_mesh(cursor: ByteCursor, index: int, mesh_count: int) -> Mesh:
    head = read_fixed(cursor, records.mesh_head_struct)
    parent = resolve_parent(index, head.parent, mesh_count)
    name = read_string(cursor)
    size = read_vec3i(cursor)
    tex_coords = [read_vec2i(cursor) for _ in range(FACE_COUNT)]
    return Mesh(
        name=name,
        parent=parent,
        transform=to_transform(head.transform),
        origin=Vec3(head.origin.x, head.origin.y, head.origin.z),
        size=size,
        tex_coords=tex_coords,
    )


def read_meshes(cursor: ByteCursor, meshes: list[Mesh]) -> None:
    """Read the mesh array, appending to meshes."""
    count = read_u32(cursor)
    _logger.debug(f"Reading {count} meshes")
    for index in range(count):
        meshes.append(read_mesh(cursor, index, count))


# ------------------------------------------------------------
# Animations
# ------------------------------------------------------------
def read_coord_change(cursor: ByteCursor) -> Optional[CoordChange]:
    """Read one face slot; the payload is only present when flagged."""
    if not read_bool(cursor):
        return None
    change = read_fixed(cursor, records.coord_change_struct)
    return CoordChange(change.x, change.y)


def read_frame_mesh(cursor: ByteCursor) -> FrameMesh:
    transform = read_transform(cursor)
    coord_changes = [read_coord_change(cursor) for _ in range(FACE_COUNT)]
    return FrameMesh(transform=transform, coord_changes=coord_changes)


def read_frame(cursor: ByteCursor, frames: list[Frame]) -> None:
    """Read one frame, appending it to frames.

    Delta slots are positional; they are not matched to model meshes here.
    """
    head = read_fixed(cursor, records.frame_head_struct)
    frame = Frame(duration=head.duration)
    frames.append(frame)
    for _ in range(head.delta_count):
        frame.frame_meshes.append(read_frame_mesh(cursor))


def read_animation(cursor: ByteCursor, animations: list[Animation]) -> None:
    animation = Animation(name=read_string(cursor))
    animations.append(animation)
    frame_count = read_u32(cursor)
    for _ in range(frame_count):
        read_frame(cursor, animation.frames)
    _logger.debug(f"Animation '{animation.name}': {frame_count} frames")


def read_animations(cursor: ByteCursor, animations: list[Animation]) -> None:
    """Read the animation array, appending to animations."""
    count = read_u32(cursor)
    _logger.debug(f"Reading {count} animations")
    for _ in range(count):
        read_animation(cursor, animations)


# ------------------------------------------------------------
# Model
# ------------------------------------------------------------
class DecodeState(Enum):
    START = 'start'
    HEADER_CHECKED = 'header_checked'
    TEXTURE_LOADED = 'texture_loaded'
    MESHES_LOADED = 'meshes_loaded'
    ANIMATIONS_LOADED = 'animations_loaded'
    FAILED = 'failed'


class OEMeshDecoder:
    """Decodes one OEMesh model from an in-memory buffer.

    The decoder moves through the states START, HEADER_CHECKED,
    TEXTURE_LOADED, MESHES_LOADED and ANIMATIONS_LOADED, or ends in FAILED.
    It is single use: create a new decoder for every buffer.

    Attributes:
        state: Current DecodeState
        position: Current offset in the buffer

    Example:
        model = OEMeshDecoder(data).decode()
    """

    def __init__(
        self,
        data: BytesLike,
        import_settings: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize the decoder.

        Args:
            data: Complete model file content, never modified
            import_settings: Overrides of DEFAULT_IMPORT_SETTINGS
        """
        self._logger = get_logger(f"{__name__}.OEMeshDecoder")
        self._settings = self._validate_settings(import_settings or {})
        self._cursor = ByteCursor(data)
        self._state = DecodeState.START

    @property
    def state(self) -> DecodeState:
        return self._state

    @property
    def position(self) -> int:
        return self._cursor.position

    def decode(self) -> OEMeshModel:
        """Decode the whole buffer.

        Returns:
            A fully populated model

        Raises:
            OEMeshError: On the first failure; nothing is returned
        """
        if self._state is not DecodeState.START:
            raise RuntimeError(f"Decoder already used (state: {self._state.value})")

        model = OEMeshModel()
        try:
            model.version = self._read_header()
            self._advance(DecodeState.HEADER_CHECKED)

            model.texture = read_texture(self._cursor, self._settings['max_texture_pixels'])
            self._advance(DecodeState.TEXTURE_LOADED)

            read_meshes(self._cursor, model.meshes)
            self._advance(DecodeState.MESHES_LOADED)

            read_animations(self._cursor, model.animations)
            self._check_trailing()
            self._advance(DecodeState.ANIMATIONS_LOADED)
        except MemoryError as e:
            self._fail(model, e)
            raise AllocationError(f"Out of memory at offset {self.position}") from e
        except OEMeshError as e:
            self._fail(model, e)
            raise
        finally:
            self._cursor.release()

        self._logger.debug(
            f"Decoded version {model.version}: {len(model.meshes)} meshes, "
            f"{len(model.animations)} animations"
        )
        return model

    def _validate_settings(self, import_settings: dict[str, Any]) -> dict[str, Any]:
        unknown = set(import_settings) - set(DEFAULT_IMPORT_SETTINGS)
        if unknown:
            self._logger.debug(f"Ignoring unknown settings: {sorted(unknown)}")
        settings = {**DEFAULT_IMPORT_SETTINGS, **import_settings}

        max_pixels = settings['max_texture_pixels']
        if isinstance(max_pixels, bool) or not isinstance(max_pixels, int) or max_pixels <= 0:
            raise SettingsError(f"max_texture_pixels must be a positive integer, got {max_pixels!r}")
        if settings['cancel_check'] is not None and not callable(settings['cancel_check']):
            raise SettingsError(f"cancel_check must be callable, got {settings['cancel_check']!r}")
        if not isinstance(settings['strict_trailing'], bool):
            raise SettingsError(f"strict_trailing must be a bool, got {settings['strict_trailing']!r}")
        return settings

    def _read_header(self) -> int:
        try:
            signature = read_prefixed_bytes(self._cursor)
        except TruncatedError as e:
            raise InvalidHeaderError("Missing OEMesh header") from e
        if signature != OEMESH_SIGNATURE:
            raise InvalidHeaderError(f"Not an OEMesh file (signature {signature[:16]!r})")

        # Version is informational only
        version = read_u8(self._cursor)
        self._logger.debug(f"OEMesh version {version}")
        return version

    def _check_trailing(self) -> None:
        if self._cursor.at_end():
            return
        if self._settings['strict_trailing']:
            raise TrailingDataError(
                f"{self._cursor.remaining} unexpected bytes at offset {self.position}")
        self._logger.debug(f"Ignoring {self._cursor.remaining} trailing bytes")

    def _advance(self, state: DecodeState) -> None:
        self._state = state
        if state is DecodeState.ANIMATIONS_LOADED:
            return
        cancel_check: Optional[Callable[[], bool]] = self._settings['cancel_check']
        if cancel_check is not None and cancel_check():
            raise DecodeCancelledError(f"Decode cancelled after {state.value}")

    def _fail(self, model: OEMeshModel, error: BaseException) -> None:
        self._logger.error(
            f"Decode failed after {self._state.value} at offset {self.position}: {error}")
        self._state = DecodeState.FAILED
        model.unload()
