#!/usr/bin/env python3
"""
Entry point for running shelfhelpers as a module.
Allows: python -m shelfhelpers
"""

from .core import run

if __name__ == '__main__':
    run()
