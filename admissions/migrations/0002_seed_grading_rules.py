from django.db import migrations

from admissions.engine.grading import STANDARD_GRADES


def seed_grading_rules(apps, schema_editor):
    GradingRule = apps.get_model('admissions', 'GradingRule')
    for grade, marks in STANDARD_GRADES.items():
        GradingRule.objects.get_or_create(grade=grade, defaults={'marks': marks})


def remove_grading_rules(apps, schema_editor):
    GradingRule = apps.get_model('admissions', 'GradingRule')
    GradingRule.objects.filter(grade__in=list(STANDARD_GRADES)).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('admissions', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_grading_rules, remove_grading_rules),
    ]
