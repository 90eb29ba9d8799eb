"""
ASGI config for huffchat project.

It exposes the ASGI callable as a module-level variable named ``application``.
The websocket route speaks the same binary frames as the TCP server
started by ``manage.py huffserver``.
"""

import os

import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'huffchat.settings')
django.setup()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402

import hc.routing  # noqa: E402

# Main ASGI application
application = ProtocolTypeRouter({
    "websocket": URLRouter(
        hc.routing.websocket_urlpatterns   # from hc/routing.py
    ),
})
