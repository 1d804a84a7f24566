"""Launch the wallet dashboard under ``streamlit run``.

Extra command-line arguments (``--server.port 8600``) go straight to streamlit.
"""
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

APP_PATH = Path(__file__).with_name("app.py")


def build_command(args: List[str]) -> List[str]:
    return [sys.executable, "-m", "streamlit", "run", str(APP_PATH), *args]


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    return subprocess.call(build_command(list(args)))


if __name__ == "__main__":
    raise SystemExit(main())
