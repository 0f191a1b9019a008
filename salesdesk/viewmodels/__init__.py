"""ViewModel package for UI state and command surfaces.

Call context:
    ``salesdesk/app`` presenters import concrete view models from this package
    and bind view callbacks to them.

Dependencies:
    Domain types and use cases only; nothing here imports tkinter, so every
    workflow runs headless under pytest.

Responsibilities:
    - Project entity snapshots into display rows and resolve row actions.
    - Run the modal form workflow and the delete confirmation gate.
    - Hold form and settings state with validation.
"""
