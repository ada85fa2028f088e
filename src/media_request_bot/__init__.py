"""
media-request-bot: Chat front-end for a media request service.

Turns free-text chat commands into searches and requests against a
Jellyseerr/Overseerr style catalog, holding one pending selection per user.
"""

__version__ = "0.1.0"
