from __future__ import annotations

from adlistsync.ui.cli import run

if __name__ == "__main__":
    run()
