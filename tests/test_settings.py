from django.apps import apps
from django.conf import settings


def test_no_database_or_models():
    assert settings.DATABASES["default"]["ENGINE"] == "django.db.backends.dummy"
    assert list(apps.get_app_config("hc").get_models()) == []


def test_huffman_logger_configured():
    assert settings.LOGGING["loggers"]["hc"]["level"] == settings.HUFFMAN_LOG_LEVEL
