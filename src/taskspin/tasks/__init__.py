"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_registry.py: ordered task list persisted in the key-value store
- reset_scheduler.py: polling loop that clears completion flags on schedule
- wheel.py: random pick among incomplete tasks
"""
