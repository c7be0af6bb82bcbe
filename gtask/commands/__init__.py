"""
This __init__.py file makes the 'commands' directory a Python package.

Each module defines a handler for one or more CLI commands. Handlers take a
single ``args`` object whose ``file`` attribute is the task file path.
"""

from .add_command import handle_add_node, handle_add_task
from .backup_command import handle_backups, handle_restore
from .delete_command import handle_remove
from .edit_command import handle_fold, handle_rename, handle_set_done
from .search_command import handle_search
from .show_command import handle_export, handle_show, handle_stats
