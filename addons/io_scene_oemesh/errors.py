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

"""Exceptions raised while loading OEMesh models."""

from __future__ import annotations


class OEMeshError(RuntimeError):
    """Base class for every OEMesh loading failure."""
    pass


class IoUnavailableError(OEMeshError):
    """Raised when the model file cannot be opened or read."""
    pass


class TruncatedError(OEMeshError):
    """Raised when a read would run past the end of the buffer.

    Attributes:
        position: Cursor position at the failed read
        requested: Number of bytes requested
        remaining: Number of bytes left in the buffer
    """

    def __init__(self, position: int, requested: int, remaining: int) -> None:
        super().__init__(
            f"Truncated data: need {requested} bytes at offset {position}, "
            f"only {remaining} left"
        )
        self.position = position
        self.requested = requested
        self.remaining = remaining


class InvalidHeaderError(OEMeshError):
    """Raised when the magic marker is missing or does not match."""
    pass


class InvalidReferenceError(OEMeshError):
    """Raised when a mesh parent does not point at an earlier mesh.

    Attributes:
        mesh_index: Index of the offending mesh
        parent: Raw parent value read from the stream
    """

    def __init__(self, mesh_index: int, parent: int, mesh_count: int) -> None:
        super().__init__(
            f"Invalid parent {parent} for mesh {mesh_index} of {mesh_count}"
        )
        self.mesh_index = mesh_index
        self.parent = parent


class InvalidTextureError(OEMeshError):
    """Raised when the atlas dimensions are not positive."""
    pass


class AllocationError(OEMeshError):
    """Raised when an array is too large to be materialised."""
    pass


class TrailingDataError(OEMeshError):
    """Raised in strict mode when bytes follow the animation array."""
    pass


class SettingsError(OEMeshError):
    """Raised when an import setting has an invalid value."""
    pass


class DecodeCancelledError(OEMeshError):
    """Raised when the caller cancels a decode between stages."""
    pass
