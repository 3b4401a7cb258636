from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("recipients", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Batch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity_received", models.PositiveIntegerField(help_text="Quantity received (immutable)")),
                ("quantity", models.PositiveIntegerField(help_text="Remaining quantity (service-managed only)")),
                ("expiry_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("AVAILABLE", "Available"), ("DONATED", "Donated"), ("WASTED", "Wasted")],
                        default="AVAILABLE",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="batches",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["expiry_date", "id"],
                "verbose_name_plural": "batches",
                "indexes": [
                    models.Index(fields=["expiry_date"], name="inv_batch_expiry_idx"),
                    models.Index(fields=["status"], name="inv_batch_status_idx"),
                    models.Index(fields=["status", "expiry_date"], name="inv_batch_status_expiry_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity_received__gt", 0)),
                        name="chk_batch_qty_received_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 0)),
                        name="chk_batch_qty_gte_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__lte", models.F("quantity_received"))),
                        name="chk_batch_qty_lte_received",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("status", "AVAILABLE"), ("quantity", 0), _connector="OR"),
                        name="chk_batch_terminal_qty_zero",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DonationRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("donated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="donations",
                        to="inventory.batch",
                    ),
                ),
                (
                    "recipient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="donations",
                        to="recipients.recipient",
                    ),
                ),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="donation_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["donated_at", "id"],
                "indexes": [
                    models.Index(fields=["batch", "donated_at"], name="inv_donation_batch_idx"),
                    models.Index(fields=["recipient", "donated_at"], name="inv_donation_recipient_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="chk_donation_qty_gt_zero",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="WasteRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("reason", models.CharField(default="expired", max_length=50)),
                ("logged_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="waste_records",
                        to="inventory.batch",
                    ),
                ),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="waste_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["logged_at", "id"],
                "indexes": [
                    models.Index(fields=["batch", "logged_at"], name="inv_waste_batch_idx"),
                    models.Index(fields=["logged_at"], name="inv_waste_logged_at_idx"),
                ],
            },
        ),
    ]
