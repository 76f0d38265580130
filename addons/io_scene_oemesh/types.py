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

"""Data structures for decoded OEMesh models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .constants import FACE_COUNT


class Vec2i(NamedTuple):
    x: int
    y: int


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


class Vec3i(NamedTuple):
    x: int
    y: int
    z: int


class Quat(NamedTuple):
    x: float
    y: float
    z: float
    w: float


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int


@dataclass
class Transform:
    """Local rigid transform of a mesh.

    Attributes:
        translation: Translation (x, y, z)
        rotation: Rotation quaternion (x, y, z, w)
        scale: Scale (x, y, z)
    """
    translation: Vec3
    rotation: Quat
    scale: Vec3


@dataclass
class Texture:
    """Holds the texture atlas.

    Attributes:
        width: Atlas width in pixels
        height: Atlas height in pixels
        pixels: Row-major RGBA pixels, width * height entries
    """
    width: int
    height: int
    pixels: list[Color] = field(default_factory=list)

    def pixel_at(self, x: int, y: int) -> Color:
        """Get the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} atlas")
        return self.pixels[y * self.width + x]


@dataclass
class Mesh:
    """Holds one cuboid node of the hierarchy.

    Attributes:
        name: Mesh name
        parent: Index of the parent mesh in the model, None for a root
        transform: Local transform
        origin: Origin offset of the cuboid
        size: Cuboid size in pixels (width, height, depth)
        tex_coords: Atlas coordinates of each face, ordered as FACE_NAMES
    """
    name: str
    parent: Optional[int]
    transform: Transform
    origin: Vec3
    size: Vec3i
    tex_coords: list[Vec2i] = field(default_factory=list)


@dataclass
class CoordChange:
    """Atlas coordinate override of one face for one frame."""
    x: int
    y: int


@dataclass
class FrameMesh:
    """Per-mesh delta of a frame.

    Attributes:
        transform: Transform override
        coord_changes: One slot per face, None when the face keeps its base
            coordinates
    """
    transform: Transform
    coord_changes: list[Optional[CoordChange]] = field(
        default_factory=lambda: [None] * FACE_COUNT)


@dataclass
class Frame:
    """Holds a single keyframe.

    Attributes:
        duration: Frame duration in seconds
        frame_meshes: Deltas, one per animated mesh slot
    """
    duration: float
    frame_meshes: list[FrameMesh] = field(default_factory=list)


@dataclass
class Animation:
    """Holds a named animation clip.

    Attributes:
        name: Clip name
        frames: Frames in playback order
    """
    name: str
    frames: list[Frame] = field(default_factory=list)

    @property
    def duration(self) -> float:
        """Total clip length in seconds."""
        return sum(f.duration for f in self.frames)


@dataclass
class OEMeshModel:
    """Root data structure of a decoded OEMesh file.

    Meshes reference their parent by index into ``meshes``; a parent always
    precedes its children.

    Attributes:
        version: Format version byte
        texture: Texture atlas
        meshes: Meshes in stream order
        animations: Animation clips in stream order
    """
    version: int = 0
    texture: Optional[Texture] = None
    meshes: list[Mesh] = field(default_factory=list)
    animations: list[Animation] = field(default_factory=list)

    def roots(self) -> list[int]:
        """Get the indices of meshes without a parent."""
        return [i for i, m in enumerate(self.meshes) if m.parent is None]

    def children(self, index: int) -> list[int]:
        """Get the indices of the direct children of a mesh."""
        return [i for i, m in enumerate(self.meshes) if m.parent == index]

    def parent_of(self, index: int) -> Optional[Mesh]:
        """Get the parent mesh of a mesh, None for a root."""
        parent = self.meshes[index].parent
        return None if parent is None else self.meshes[parent]

    def find_mesh(self, name: str) -> Optional[int]:
        """Get the index of the first mesh with the given name."""
        return next((i for i, m in enumerate(self.meshes) if m.name == name), None)

    def find_animation(self, name: str) -> Optional[Animation]:
        """Get the first animation with the given name."""
        return next((a for a in self.animations if a.name == name), None)

    def unload(self) -> None:
        """Release every array owned by the model.

        Safe to call more than once.
        """
        for animation in self.animations:
            for frame in animation.frames:
                frame.frame_meshes.clear()
            animation.frames.clear()
        self.animations.clear()

        for mesh in self.meshes:
            mesh.tex_coords.clear()
        self.meshes.clear()

        if self.texture is not None:
            self.texture.pixels.clear()
            self.texture = None
