from django.db import models

SETTINGS_ID = 'single-settings'


class CompanySettings(models.Model):
    """
    The business's own identity, printed on invoices.
    A single row keyed by SETTINGS_ID.
    """
    id = models.CharField(primary_key=True, max_length=50, default=SETTINGS_ID, editable=False)
    name = models.CharField(max_length=255, blank=True)
    cpf = models.CharField(max_length=20, blank=True)
    cnpj = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    website = models.CharField(max_length=255, blank=True)
    logo = models.FileField(upload_to='company/', null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'Company settings'

    def __str__(self):
        return self.name or 'Company settings'
