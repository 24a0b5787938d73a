import uuid
import apps.knowledge_base.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Article',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(default='Untitled', max_length=255)),
                ('category', models.CharField(blank=True, db_index=True, max_length=100)),
                ('icon', models.CharField(blank=True, max_length=50)),
                ('content', models.JSONField(blank=True, default=apps.knowledge_base.models.default_content)),
                ('metadata', models.JSONField(blank=True, default=list)),
                ('author_id', models.UUIDField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-updated_at'],
            },
        ),
    ]
