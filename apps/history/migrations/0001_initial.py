# Generated manually for history app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='HistoryEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('generated', 'Generated'), ('submitted', 'Submitted'), ('cleared', 'Cleared')], max_length=9)),
                ('team_member', models.CharField(blank=True, max_length=200)),
                ('code', models.CharField(db_index=True, max_length=10)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('comments', models.TextField(blank=True)),
                ('clearance_id', models.CharField(blank=True, max_length=100)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='history_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'history_entries',
                'ordering': ['-date'],
                'verbose_name_plural': 'history entries',
                'indexes': [models.Index(fields=['type', '-date'], name='history_type_date_idx')],
            },
        ),
    ]
