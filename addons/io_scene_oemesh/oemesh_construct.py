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

"""Fixed-size OEMesh records.

Every record has a static size so it can be read from a ByteCursor in one
bounds-checked step and then parsed. All fields are little-endian with no
padding.
"""

from construct import Byte, Flag, Float32l, Int32sl, Int32ul, Struct

# Scalars
u8 = Byte
u32 = Int32ul
i32 = Int32sl
f32 = Float32l
boolean = Flag

# String length prefix, followed by that many raw bytes
string_length = Int32ul

vec2i_struct = Struct(
    "x" / Int32sl,
    "y" / Int32sl,
)

vec3_struct = Struct(
    "x" / Float32l,
    "y" / Float32l,
    "z" / Float32l,
)

vec3i_struct = Struct(
    "x" / Int32sl,
    "y" / Int32sl,
    "z" / Int32sl,
)

quat_struct = Struct(
    "x" / Float32l,
    "y" / Float32l,
    "z" / Float32l,
    "w" / Float32l,
)

color_struct = Struct(
    "r" / Byte,
    "g" / Byte,
    "b" / Byte,
    "a" / Byte,
)

# 40 bytes
transform_struct = Struct(
    "translation" / vec3_struct,
    "rotation" / quat_struct,
    "scale" / vec3_struct,
)

# Texture header, followed by width * height color records
texture_header_struct = Struct(
    "width" / Int32sl,
    "height" / Int32sl,
)

# Fixed part of a mesh before its name
mesh_head_struct = Struct(
    "parent" / Int32sl,
    "transform" / transform_struct,
    "origin" / vec3_struct,
)

# Fixed part of a frame before its deltas
frame_head_struct = Struct(
    "duration" / Float32l,
    "delta_count" / Int32ul,
)

# Face change payload, present only when its flag is set
coord_change_struct = vec2i_struct
