"""
tests/test_packaging.py - Installed distribution metadata.
"""

import re
from importlib import metadata


def _requirement_names():
    return {re.split(r"[\s<>=!~;\[]", req, maxsplit=1)[0].lower()
            for req in metadata.requires("hexglobe") or []}


class TestDependencies:

    def test_directly_imported_libraries_are_declared(self):
        names = _requirement_names()
        for dist in ("pyrender", "pyglet", "trimesh", "pyproj", "h3", "click"):
            assert dist in names
