from django.urls import re_path

from hc import consumers

websocket_urlpatterns = [
    re_path(r"^ws/huffman/$", consumers.HuffmanConsumer.as_asgi()),
]
