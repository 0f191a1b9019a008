"""Use-case layer for the department and seller workflows.

Each module wraps one port call, maps adapter failures to ``ServiceError`` and
keeps view models free of transport and storage details.
"""
