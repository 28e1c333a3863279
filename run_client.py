"""Entry point for running the OnlyUs desktop profile client."""
from __future__ import annotations

import sys

from onlyus.main import main


if __name__ == "__main__":
  main(sys.argv[1:])
