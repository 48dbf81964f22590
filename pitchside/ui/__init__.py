"""
UI package for the Pitchside match recorder.

This package contains the Flask JSON API used by the match screens.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
