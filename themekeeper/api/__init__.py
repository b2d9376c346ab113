"""Themekeeper HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that receives theme editor webhooks.

Public API
----------
create_app
    Application factory registering the webhook, greeting and health
    endpoints around an event worker.
AppDependencies
    Collaborators required by ``create_app``.
"""

from themekeeper.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
