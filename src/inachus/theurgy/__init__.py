"""
Theurgy - Command implementations for inachus.

Each command module corresponds to a top-level CLI command:
- workflow: the interactive contract session (``run``)
- invoke:   execute a single method non-interactively
- catalog:  list contracts and methods

The session, dispatcher and prompt modules are the engine those commands
share.
"""
