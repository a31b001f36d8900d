#!/usr/bin/env python3
"""MultiTimer — entry point.

Run with:
    python main.py
    python -m multitimer
"""

from multitimer.__main__ import main


if __name__ == "__main__":
    main()
