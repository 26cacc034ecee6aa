import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

ADMISSION_STATUS_CHOICES = [('NOT_ADMITTED', 'Not Admitted'), ('IN_PROGRESS', 'In Progress'), ('ADMITTED', 'Admitted'), ('REJECTED', 'Rejected')]
STATUS_ORIGIN_CHOICES = [('AUTOMATIC', 'Automatic'), ('OVERRIDE', 'Override')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GradingRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('grade', models.CharField(max_length=5, unique=True)),
                ('marks', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(9)])),
            ],
            options={
                'ordering': ['-marks', 'grade'],
            },
        ),
        migrations.CreateModel(
            name='Department',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150)),
                ('code', models.CharField(max_length=20, unique=True)),
                ('description', models.TextField(blank=True)),
                ('utme_cutoff_mark', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(400)])),
                ('olevel_cutoff_aggregate', models.PositiveSmallIntegerField()),
                ('final_cutoff_mark', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ('exam_percentage', models.PositiveSmallIntegerField(default=70, validators=[django.core.validators.MaxValueValidator(100)])),
                ('olevel_percentage', models.PositiveSmallIntegerField(default=30, validators=[django.core.validators.MaxValueValidator(100)])),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')], default='ACTIVE', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Candidate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=255)),
                ('utme_score', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(400)])),
                ('olevel_aggregate', models.PositiveSmallIntegerField(default=0)),
                ('olevel_percentage', models.PositiveSmallIntegerField(default=0)),
                ('exam_percentage', models.PositiveSmallIntegerField(default=0)),
                ('final_score', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('admission_status', models.CharField(choices=ADMISSION_STATUS_CHOICES, db_index=True, default='NOT_ADMITTED', max_length=20)),
                ('status_origin', models.CharField(choices=STATUS_ORIGIN_CHOICES, default='AUTOMATIC', max_length=20)),
                ('version', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('department', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='candidates', to='admissions.department')),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='candidate', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='OLevelResult',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subject', models.CharField(max_length=100)),
                ('grade', models.CharField(max_length=5)),
                ('candidate', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='olevel_results', to='admissions.candidate')),
                ('grading_rule', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='results', to='admissions.gradingrule')),
            ],
            options={
                'unique_together': {('candidate', 'subject')},
            },
        ),
        migrations.CreateModel(
            name='AdmissionDecision',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('origin', models.CharField(choices=STATUS_ORIGIN_CHOICES, max_length=20)),
                ('previous_status', models.CharField(choices=ADMISSION_STATUS_CHOICES, max_length=20)),
                ('status', models.CharField(choices=ADMISSION_STATUS_CHOICES, max_length=20)),
                ('derived_status', models.CharField(blank=True, choices=ADMISSION_STATUS_CHOICES, max_length=20)),
                ('final_score', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='admission_decisions', to=settings.AUTH_USER_MODEL)),
                ('candidate', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='decisions', to='admissions.candidate')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
