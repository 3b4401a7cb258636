from django.contrib import admin

from recipients.models import Recipient


@admin.register(Recipient)
class RecipientAdmin(admin.ModelAdmin):
    list_display = ("org_name", "contact_phone", "address", "is_active")
    list_filter = ("is_active",)
    search_fields = ("org_name", "address")
