"""
Task subsystem.

Components:
- task_models.py: data structures (Task, StoreState, TaskFilter, Theme)
- task_store.py: canonical list + derived partitions, write-through persistence
"""
