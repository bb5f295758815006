"""
REST API for the ROI tracking engine.
"""

from .main import app, create_app, run_api

__all__ = ['app', 'create_app', 'run_api']
