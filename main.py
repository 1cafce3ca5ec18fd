"""Entry point — run the cartridge CLI from a source checkout."""

from __future__ import annotations

import sys

from cartridge.cli import main

if __name__ == "__main__":
    sys.exit(main())
