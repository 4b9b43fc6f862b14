#!/usr/bin/env python3
import os
import sys


def add_backend_to_path() -> None:
    # Allow running this script from repo root without installing as a package
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    backend = os.path.join(repo_root, "backend")
    if backend not in sys.path:
        sys.path.insert(0, backend)


add_backend_to_path()

from cinedex.scripts.scrape_title import main  # noqa: E402


if __name__ == "__main__":
    main()
