"""
Task subsystem.

Components:
- task_models.py: Task record and the task_<id> / completed_<id> key codec
- task_store.py: TaskStore, the in-memory list mirrored into a key-value store
- async_store.py: awaitable facade that keeps storage I/O off the event loop
"""
