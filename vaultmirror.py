#!/usr/bin/env python3
"""
vaultmirror - Main entry point script.
This file serves as the executable entry point for the CLI.
"""

# Import the app from cli.__main__
from cli.__main__ import app

if __name__ == "__main__":
    app()
