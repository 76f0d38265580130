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

"""Constants and configuration for the OEMesh decoder."""

from typing import Final

# Package information
PACKAGE_NAME: Final[str] = "io_scene_oemesh"

# Supported file extensions
SUPPORTED_EXTENSIONS: Final[tuple[str, ...]] = ('.oemesh',)

# OEMesh file signature, stored as a length-prefixed string
OEMESH_SIGNATURE: Final[bytes] = b"oemesh"

# Environment variable selecting the log level (see logging_utils)
DEBUG_ENV_VAR: Final[str] = "OEMESH_DEBUG"

# Encoding used for mesh and animation names
STRING_ENCODING: Final[str] = "utf-8"

# Parent value of a root mesh
NO_PARENT: Final[int] = -1

# Cuboid faces, in stream order
FACE_COUNT: Final[int] = 6
FACE_NAMES: Final[tuple[str, ...]] = ('front', 'back', 'left', 'right', 'top', 'bottom')

# Pixel format: r, g, b, a as unsigned bytes
PIXEL_SIZE: Final[int] = 4

# Upper bound on atlas pixels (16384 x 16384)
DEFAULT_MAX_TEXTURE_PIXELS: Final[int] = 16384 * 16384

# Default import settings
DEFAULT_IMPORT_SETTINGS: Final[dict] = {
    'max_texture_pixels': DEFAULT_MAX_TEXTURE_PIXELS,
    'cancel_check': None,
    'strict_trailing': False,
}
