"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, TaskColumns)
- task_uris.py: TaskUri + classification of collection / item URIs
- task_store.py: TaskDatabase, the lazily opened shared SQLite connection
- task_provider.py: URI-addressed CRUD dispatch + change notifications
- task_cursor.py: live result sets returned by queries
- task_notify.py: observer registry for change notifications
- task_api.py: small high-level helpers used by the rest of the app
"""
