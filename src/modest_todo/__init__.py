"""modest-todo: a small single-user task list manager."""

__version__ = "0.1.0"
