#!/usr/bin/env python3
"""
Main entry point for the Pitchside web API.

This script launches the Flask-based server using PITCHSIDE_* environment settings.
"""
from pitchside.ui.web_app import run_web_app

if __name__ == "__main__":
    run_web_app()
