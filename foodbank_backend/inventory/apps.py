# inventory/apps.py

"""
INVENTORY APP CONFIG

Disposition core:
- Batch state machine (Available -> Donated | Wasted)
- Donation allocation
- Expiry sweep
- Donation candidate query
"""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory Disposition"
