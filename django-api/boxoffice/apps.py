from django.apps import AppConfig


class BoxOfficeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "boxoffice"
    verbose_name = "Box office"

    def ready(self) -> None:
        from boxoffice import signals  # noqa: F401
