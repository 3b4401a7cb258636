# catalog/tests/test_lookups.py

from django.test import TestCase

from catalog.lookups import ProductNotFound, get_product
from catalog.models import Category, Product


class ProductLookupTests(TestCase):
    def setUp(self):
        self.category = Category.objects.create(
            name="Dairy",
            storage_type=Category.StorageType.REFRIGERATED,
        )
        self.product = Product.objects.create(
            name="Whole Milk",
            sku="MILK01",
            category=self.category,
        )

    def test_get_product_returns_name_and_category(self):
        info = get_product(self.product.id)

        self.assertEqual(info.id, self.product.id)
        self.assertEqual(info.name, "Whole Milk")
        self.assertEqual(info.category_id, self.category.id)
        self.assertEqual(info.category_name, "Dairy")

    def test_missing_product_raises(self):
        with self.assertRaises(ProductNotFound):
            get_product(self.product.id + 999)
