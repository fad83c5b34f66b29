# Shared fixtures for wildkarte tests.
# The sample tree mirrors the one used throughout the expand tests.

from __future__ import annotations

from pathlib import Path

import pytest

# Relative file paths created under <base>/test.
SAMPLE_FILES = [
    "a/a1/a1-aaa.txt",
    "a/a1/a1-aab.js",
    "a/a2/a2-aaa.txt",
    "a/a2/a2-aab.js",
    "a/a2/a2-aac.ts",
    "a/a3/a3-aaa.txt",
    "a/a3/a3-aaa.ts",
    "b/config.ts",
    "b/b1/readme.txt",
    "b/b2/notes.md",
]


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """
    Build the sample tree and return its base directory.

    Structure:
        tmp_path/
        └── test/
            ├── a/
            │   ├── a1/  a1-aaa.txt  a1-aab.js
            │   ├── a2/  a2-aaa.txt  a2-aab.js  a2-aac.ts
            │   └── a3/  a3-aaa.txt  a3-aaa.ts
            └── b/
                ├── config.ts
                ├── b1/  readme.txt
                └── b2/  notes.md
    """
    for rel in SAMPLE_FILES:
        f = tmp_path / "test" / rel
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_text(rel, encoding="utf-8")
    return tmp_path
