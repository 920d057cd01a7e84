"""
Reference descriptor server for dynaform.

Serves a descriptor list over HTTP for HttpDescriptorStore clients.
"""

from dynaform.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
