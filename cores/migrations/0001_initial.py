import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PlatformSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('site_name', models.CharField(default='Admission Screening Portal', max_length=100)),
                ('support_email', models.EmailField(default='admissions@example.edu.ng', max_length=254)),
                ('recommendation_margin', models.PositiveIntegerField(default=10, help_text="Points above a department's final cutoff for a HIGHLY_RECOMMENDED verdict")),
                ('default_exam_weight', models.PositiveIntegerField(default=70, help_text='Exam weight given to new departments', validators=[django.core.validators.MaxValueValidator(100)])),
                ('default_olevel_weight', models.PositiveIntegerField(default=30, help_text="O'Level weight given to new departments", validators=[django.core.validators.MaxValueValidator(100)])),
                ('max_alternative_departments', models.PositiveIntegerField(default=5, help_text='Alternatives suggested by the pre-registration eligibility check')),
            ],
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('OVERRIDE', 'Admission Status Override'), ('RECALCULATE', 'Scores Recalculated'), ('ASSIGN_TESTS', 'Tests Assigned'), ('SETTINGS', 'Settings Changed'), ('RESULTS', "O'Level Results Replaced")], max_length=20)),
                ('target_model', models.CharField(help_text='e.g., Candidate, Department, PlatformSetting', max_length=50)),
                ('target_object_id', models.CharField(blank=True, max_length=100, null=True)),
                ('details', models.TextField(blank=True, help_text='Description of changes')),
                ('timestamp', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-timestamp'],
            },
        ),
    ]
