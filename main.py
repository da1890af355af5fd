from __future__ import annotations

import sys
from pathlib import Path

# `python main.py` で src レイアウトのまま起動できるようにする
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from api.visualizer import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
