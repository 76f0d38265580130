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

"""Builders for OEMesh test data."""

from __future__ import annotations

import struct
from typing import Optional, Sequence

from io_scene_oemesh import oemesh_construct as records

IDENTITY = ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0, 1.0), (1.0, 1.0, 1.0))
WHITE = (255, 255, 255, 255)


def xyz(v):
    return dict(x=v[0], y=v[1], z=v[2])


def pack_string(s: bytes | str) -> bytes:
    data = s.encode('utf-8') if isinstance(s, str) else s
    return records.string_length.build(len(data)) + data


def pack_transform(t=IDENTITY) -> bytes:
    translation, rotation, scale = t
    return records.transform_struct.build(dict(
        translation=xyz(translation),
        rotation=dict(x=rotation[0], y=rotation[1], z=rotation[2], w=rotation[3]),
        scale=xyz(scale),
    ))


def pack_texture(width: int, height: int, pixels: Optional[Sequence] = None) -> bytes:
    if pixels is None:
        pixels = [WHITE] * max(width * height, 0)
    data = records.texture_header_struct.build(dict(width=width, height=height))
    return data + b''.join(struct.pack("<4B", *p) for p in pixels)


def pack_mesh(name: str, parent: int = -1, transform=IDENTITY, origin=(0.0, 0.0, 0.0),
              size=(1, 1, 1), tex_coords: Optional[Sequence] = None) -> bytes:
    if tex_coords is None:
        tex_coords = [(0, 0)] * 6
    return (
        records.mesh_head_struct.build(dict(
            parent=parent,
            transform=dict(
                translation=xyz(transform[0]),
                rotation=dict(x=transform[1][0], y=transform[1][1],
                              z=transform[1][2], w=transform[1][3]),
                scale=xyz(transform[2]),
            ),
            origin=xyz(origin),
        ))
        + pack_string(name)
        + records.vec3i_struct.build(xyz(size))
        + b''.join(records.vec2i_struct.build(dict(x=u, y=v)) for u, v in tex_coords)
    )


def pack_meshes(meshes: Sequence[bytes]) -> bytes:
    return records.u32.build(len(meshes)) + b''.join(meshes)


def pack_face_change(change: Optional[tuple[int, int]]) -> bytes:
    if change is None:
        return records.boolean.build(False)
    return records.boolean.build(True) + records.coord_change_struct.build(
        dict(x=change[0], y=change[1]))


def pack_frame_mesh(transform=IDENTITY, changes: Optional[Sequence] = None) -> bytes:
    if changes is None:
        changes = [None] * 6
    return pack_transform(transform) + b''.join(pack_face_change(c) for c in changes)


def pack_frame(duration: float, frame_meshes: Sequence[bytes]) -> bytes:
    return records.frame_head_struct.build(
        dict(duration=duration, delta_count=len(frame_meshes))) + b''.join(frame_meshes)


def pack_animation(name: str, frames: Sequence[bytes]) -> bytes:
    return pack_string(name) + records.u32.build(len(frames)) + b''.join(frames)


def pack_animations(animations: Sequence[bytes]) -> bytes:
    return records.u32.build(len(animations)) + b''.join(animations)


def pack_model(meshes: Sequence[bytes] = (), animations: Sequence[bytes] = (),
               texture: Optional[bytes] = None, version: int = 1,
               signature: bytes = b"oemesh") -> bytes:
    if texture is None:
        texture = pack_texture(1, 1)
    return (
        pack_string(signature)
        + records.u8.build(version)
        + texture
        + pack_meshes(meshes)
        + pack_animations(animations)
    )


def minimal_model() -> bytes:
    """Header, 1x1 white texture, one root mesh, no animations."""
    return pack_model(meshes=[pack_mesh("root")])


def sample_model() -> bytes:
    """Two-level hierarchy with one animated clip."""
    return pack_model(
        texture=pack_texture(2, 1, [WHITE, (255, 0, 0, 128)]),
        meshes=[
            pack_mesh("body", size=(8, 12, 4),
                      tex_coords=[(0, 0), (8, 0), (16, 0), (24, 0), (0, 12), (8, 12)]),
            pack_mesh("head", parent=0, origin=(0.0, 12.0, 0.0), size=(8, 8, 8)),
            pack_mesh("hat", parent=1),
        ],
        animations=[
            pack_animation("wave", [
                pack_frame(0.25, [
                    pack_frame_mesh(),
                    pack_frame_mesh(changes=[(1, 2), None, None, (3, 4), None, None]),
                ]),
                pack_frame(0.5, [pack_frame_mesh()]),
            ]),
            pack_animation("idle", []),
        ],
    )
