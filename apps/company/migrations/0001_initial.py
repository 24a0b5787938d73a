from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CompanySettings',
            fields=[
                ('id', models.CharField(default='single-settings', editable=False, max_length=50, primary_key=True, serialize=False)),
                ('name', models.CharField(blank=True, max_length=255)),
                ('cpf', models.CharField(blank=True, max_length=20)),
                ('cnpj', models.CharField(blank=True, max_length=20)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('website', models.CharField(blank=True, max_length=255)),
                ('logo', models.FileField(blank=True, null=True, upload_to='company/')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name_plural': 'Company settings',
            },
        ),
    ]
