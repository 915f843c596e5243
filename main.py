#!/usr/bin/env python3
"""
Media Shelf CLI - personal media collection catalog.

Browse, filter and sort the books, movies, series and music collections kept
as JSON files, validate them, and run the local admin API used to edit them.
"""

from mediashelf.interface.cli import app

if __name__ == "__main__":
    app()
