"""Taskboard: kanban boards with dense column and task ordering"""

__version__ = "0.1.0"
