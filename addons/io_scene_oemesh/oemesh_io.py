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

"""Loading OEMesh models from memory or from files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .constants import SUPPORTED_EXTENSIONS
from .errors import IoUnavailableError
from .logging_utils import get_logger
from .oemesh_cursor import BytesLike
from .oemesh_decoder import OEMeshDecoder
from .types import OEMeshModel

_logger = get_logger(__name__)


def load_model_from_memory(
    data: BytesLike,
    import_settings: Optional[dict[str, Any]] = None,
) -> OEMeshModel:
    """Decode a model from a complete in-memory file.

    Args:
        data: File content
        import_settings: Decoder settings, see DEFAULT_IMPORT_SETTINGS

    Returns:
        The decoded model

    Raises:
        OEMeshError: If the data is not a valid model
    """
    return OEMeshDecoder(data, import_settings).decode()


def load_model_from_file(
    filename: str | Path,
    import_settings: Optional[dict[str, Any]] = None,
) -> OEMeshModel:
    """Read a whole file and decode it.

    Raises:
        IoUnavailableError: If the file cannot be read
        OEMeshError: If the content is not a valid model
    """
    path = Path(filename)
    try:
        content = path.read_bytes()
    except FileNotFoundError as e:
        raise IoUnavailableError(f"File not found: {path}") from e
    except OSError as e:
        raise IoUnavailableError(f"Cannot read {path}: {e.strerror or e}") from e

    _logger.debug(f"Read {len(content)} bytes from {path}")
    return load_model_from_memory(content, import_settings)


def unload_model(model: OEMeshModel) -> None:
    """Release every array owned by the model."""
    model.unload()


class OEMeshImporter:
    """OEMesh importer class.

    Example:
        importer = OEMeshImporter('/path/to/snowman.oemesh', {})
        importer.read()
        importer.checks()
        model = importer.model
    """

    def __init__(self, filename: str | Path, import_settings: Optional[dict[str, Any]] = None) -> None:
        """Initialize the importer.

        Args:
            filename: Path of the model file
            import_settings: Decoder settings
        """
        self.filename = str(filename)
        self.import_settings = dict(import_settings or {})
        self.model: Optional[OEMeshModel] = None
        self._logger = get_logger(f"{__name__}.OEMeshImporter")

    def read(self) -> OEMeshModel:
        """Read and decode the file."""
        self._logger.info(f"Loading: {self.filename}")
        if Path(self.filename).suffix.lower() not in SUPPORTED_EXTENSIONS:
            self._logger.warning(f"Unexpected extension for {self.filename}")

        self.model = load_model_from_file(self.filename, self.import_settings)
        self._logger.info(
            f"Loaded {len(self.model.meshes)} meshes, "
            f"{len(self.model.animations)} animations"
        )
        return self.model

    def checks(self) -> list[str]:
        """Report inconsistencies that do not prevent loading.

        Returns:
            Warning messages, also sent to the log
        """
        warnings: list[str] = []
        if self.model is None:
            return warnings

        mesh_count = len(self.model.meshes)
        for animation in self.model.animations:
            for i, frame in enumerate(animation.frames):
                if len(frame.frame_meshes) > mesh_count:
                    warnings.append(
                        f"Animation '{animation.name}' frame {i} animates "
                        f"{len(frame.frame_meshes)} meshes, model has {mesh_count}"
                    )
                if frame.duration < 0:
                    warnings.append(
                        f"Animation '{animation.name}' frame {i} has negative duration")

        for message in warnings:
            self._logger.warning(message)
        return warnings

    def unload(self) -> None:
        """Release the loaded model."""
        if self.model is not None:
            unload_model(self.model)
            self.model = None
