"""
G-Task CLI: hierarchical to-do lists of nodes and tasks, stored as XML.

Nodes hold tasks and child nodes; every node reports how much of the work
beneath it is done. The tree is kept in a small XML file that is backed up
before every save.
"""

__version__ = "1.0.0"
__author__ = "G-Task Team"

# Import the main CLI app for entry point
from .gtcli import app

__all__ = ["app", "__version__"]
