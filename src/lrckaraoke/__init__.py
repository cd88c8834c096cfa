"""LRC Karaoke - turn synchronized lyrics into animated karaoke videos."""

__version__ = "0.1.0"
