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

"""Unit tests for the OEMesh decoder."""

import unittest
import sys
from pathlib import Path

# Add the addons directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def run_tests():
    """Run all unit tests."""
    loader = unittest.TestLoader()
    suite = loader.discover(Path(__file__).parent, pattern='test_*.py',
                            top_level_dir=Path(__file__).parent.parent.parent)
    runner = unittest.TextTestRunner(verbosity=2)
    return runner.run(suite)


if __name__ == '__main__':
    run_tests()
