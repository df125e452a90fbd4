# src/pinus_hybrid/__main__.py
"""Entry point when running as python -m pinus_hybrid"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
