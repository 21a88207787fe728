#!/usr/bin/env python3
"""
Main entry point for the Fencing Scout web application.

This script launches the Flask-based web server. Settings are read from
FENCING_SCOUT_* environment variables.
"""
import os

from fencing_scout.ui.web_app import run_web_app

if __name__ == "__main__":
    # Serve index.html from the project root when present
    project_root = os.path.dirname(os.path.abspath(__file__))
    run_web_app(static_folder=project_root)
