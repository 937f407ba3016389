"""Configure pytest so ``renamer`` imports from ./src without installing."""

import sys
from pathlib import Path

src_path = str(Path(__file__).parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)
