"""Webhook intake resources.

Usage
-----
Import the resources for route registration::

    from themekeeper.api.events.resources import EventsResource, RootResource
"""
