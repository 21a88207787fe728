"""
User interface package for the Fencing Scout application.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
