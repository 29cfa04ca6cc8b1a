"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) and input parsing
- task_errors.py: error taxonomy (ValidationError, NotFoundError, LoadError, SaveError)
- task_store.py: in-memory ordered store, owns id assignment
- task_file.py: JSON file gateway (atomic save, tolerant load)
- task_query.py: filter/search/sort pipeline that derives the display view
"""
