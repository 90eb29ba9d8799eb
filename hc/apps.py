from django.apps import AppConfig


class HcConfig(AppConfig):
    name = "hc"
    verbose_name = "Huffman chat"
