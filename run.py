#!/usr/bin/env python3
"""
Convenience entry point for running rosterplanner directly.

Usage: python run.py [command] [options]
"""

from rosterplanner.cli.app import app

if __name__ == "__main__":
    app()
