"""Playback of legacy per-frame 2D trajectory logs."""

__version__ = "0.1.0"
