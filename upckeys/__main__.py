"""
upckeys Module Entry Point
===========================

Allows running the CLI via: python -m upckeys
"""

from upckeys.cli import main

if __name__ == "__main__":
    main()
