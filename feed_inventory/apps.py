from django.apps import AppConfig


class FeedInventoryConfig(AppConfig):
    name = 'feed_inventory'
    verbose_name = 'Feed Inventory'
