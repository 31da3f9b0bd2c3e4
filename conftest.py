import os
import sys
from pathlib import Path

import pytest

# Fail fast if Python version is unsupported (PEP 604 unions require 3.10+)
if sys.version_info < (3, 10):
    print(
        f"ERROR: This project requires Python 3.10+ (found {sys.version.split()[0]}).",
        file=sys.stderr,
    )
    sys.exit(1)


# Make 'src' importable before collection when the package is not installed.
ROOT_DIR = Path(__file__).parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _isolate_schemagen_env(monkeypatch):
    """Drop SCHEMAGEN_* variables from the developer shell so defaults apply."""
    for name in list(os.environ):
        if name.startswith("SCHEMAGEN_"):
            monkeypatch.delenv(name, raising=False)
