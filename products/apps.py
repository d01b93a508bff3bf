"""
Products — Application Configuration
"""

from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'products'
    verbose_name = 'Product Registry'

    def ready(self):
        import products.signals  # noqa: F401
