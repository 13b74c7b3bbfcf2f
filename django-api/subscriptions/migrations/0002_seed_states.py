from django.db import migrations

STATE_NAMES = ["Active", "Inactive", "Suspended"]


def seed_states(apps, schema_editor):
    State = apps.get_model("subscriptions", "State")
    for name in STATE_NAMES:
        State.objects.get_or_create(scope="subscription", name=name)


def remove_states(apps, schema_editor):
    State = apps.get_model("subscriptions", "State")
    State.objects.filter(scope="subscription", name__in=STATE_NAMES).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("subscriptions", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_states, remove_states),
    ]
