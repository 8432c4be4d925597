"""
Timelet utilities package.
"""

from .id_generator import generate_run_id

__all__ = ["generate_run_id"]
