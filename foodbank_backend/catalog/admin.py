from django.contrib import admin

from catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "storage_type")
    list_filter = ("storage_type",)
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "category", "created_at")
    list_filter = ("category",)
    search_fields = ("sku", "name")
    ordering = ("name",)
    readonly_fields = ("created_at",)
