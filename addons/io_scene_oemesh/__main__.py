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

"""Print a summary of OEMesh files.

Usage:
    python -m io_scene_oemesh [-v] FILE...
"""

from __future__ import annotations

import argparse
import logging
import sys

from .constants import FACE_NAMES
from .errors import OEMeshError
from .logging_utils import get_log_level_from_env, setup_logging
from .oemesh_io import OEMeshImporter
from .types import OEMeshModel


def print_model(model: OEMeshModel, verbose: bool = False) -> None:
    texture = model.texture
    print(f"  version: {model.version}")
    print(f"  texture: {texture.width}x{texture.height}")
    print(f"  meshes: {len(model.meshes)}")

    def walk(index: int, depth: int) -> None:
        mesh = model.meshes[index]
        print(f"    {'  ' * depth}{mesh.name} size={tuple(mesh.size)}")
        if verbose:
            for face, uv in zip(FACE_NAMES, mesh.tex_coords):
                print(f"    {'  ' * depth}  {face}: {tuple(uv)}")
        for child in model.children(index):
            walk(child, depth + 1)

    for root in model.roots():
        walk(root, 0)

    print(f"  animations: {len(model.animations)}")
    for animation in model.animations:
        print(f"    {animation.name}: {len(animation.frames)} frames, {animation.duration:.3f}s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="io_scene_oemesh", description="Summarize OEMesh models")
    parser.add_argument("files", nargs="+", help="OEMesh files to load")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show face coordinates and debug log")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else get_log_level_from_env())

    failed = 0
    for filename in args.files:
        print(filename)
        importer = OEMeshImporter(filename, {})
        try:
            model = importer.read()
        except OEMeshError as e:
            print(f"  error: {e}", file=sys.stderr)
            failed += 1
            continue
        importer.checks()
        print_model(model, args.verbose)
        importer.unload()

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
