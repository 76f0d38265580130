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

"""Decoder for OEMesh animated box-mesh models."""

from .errors import (
    AllocationError,
    DecodeCancelledError,
    InvalidHeaderError,
    InvalidReferenceError,
    InvalidTextureError,
    IoUnavailableError,
    OEMeshError,
    SettingsError,
    TrailingDataError,
    TruncatedError,
)
from .oemesh_decoder import DecodeState, OEMeshDecoder
from .oemesh_io import OEMeshImporter, load_model_from_file, load_model_from_memory, unload_model
from .types import (
    Animation,
    Color,
    CoordChange,
    Frame,
    FrameMesh,
    Mesh,
    OEMeshModel,
    Quat,
    Texture,
    Transform,
    Vec2i,
    Vec3,
    Vec3i,
)

__version__ = "0.1.0"
