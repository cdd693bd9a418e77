from django.apps import AppConfig


class SequencesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sequences'
    verbose_name = 'Document Numbering'
