from django.apps import AppConfig


class EggProductionConfig(AppConfig):
    name = 'egg_production'
    verbose_name = 'Egg Production'
