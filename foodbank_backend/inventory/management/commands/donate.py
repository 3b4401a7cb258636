# inventory/management/commands/donate.py

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from catalog.lookups import get_product
from inventory.services.donations import donate
from inventory.services.exceptions import DispositionError, InsufficientQuantity


class Command(BaseCommand):
    help = "Donate a quantity of one batch to a recipient."

    def add_arguments(self, parser):
        parser.add_argument("batch_id", type=int)
        parser.add_argument("recipient_id", type=int)
        parser.add_argument("quantity", type=int)

    def handle(self, *args, **options):
        try:
            result = donate(
                batch_id=options["batch_id"],
                recipient_id=options["recipient_id"],
                quantity=options["quantity"],
            )
        except InsufficientQuantity as exc:
            raise CommandError(
                f"Error: Insufficient Quantity (requested={exc.requested}, available={exc.available})"
            ) from exc
        except DispositionError as exc:
            raise CommandError(f"[{exc.code}] {exc}") from exc

        product = get_product(result.batch.product_id)
        self.stdout.write(
            f"Batch {result.batch.pk} ({product.name}, {product.category_name}): donated {result.quantity_donated}, "
            f"remaining {result.quantity_remaining} ({result.status})"
        )
        self.stdout.write(self.style.SUCCESS(result.message))
