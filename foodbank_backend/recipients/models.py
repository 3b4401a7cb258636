# recipients/models.py

from django.db import models


class Recipient(models.Model):
    """
    An organisation that receives donated stock (NGO, shelter, food bank).

    Maintained outside the disposition core; donations only check existence.
    """

    org_name = models.CharField(max_length=100)
    contact_phone = models.CharField(max_length=20, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["org_name"]

    def __str__(self):
        return self.org_name
