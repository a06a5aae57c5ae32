import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rrr', models.CharField(help_text='Remita Retrieval Reference issued by the gateway', max_length=50, unique=True)),
                ('transaction_id', models.CharField(db_index=True, help_text='Locally generated order id sent to the gateway', max_length=100)),
                ('amount', models.PositiveIntegerField(help_text='Amount in the unit the gateway was invoiced with', validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='students.student')),
            ],
            options={
                'verbose_name': 'Payment',
                'verbose_name_plural': 'Payments',
                'db_table': 'payments',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='payments_status_idx'),
                    models.Index(fields=['student', 'status'], name='payments_student_status_idx'),
                ],
            },
        ),
    ]
