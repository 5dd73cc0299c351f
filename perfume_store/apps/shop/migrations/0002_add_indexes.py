from django.db import migrations, models


class Migration(migrations.Migration):
    """
    Add indexes for the order screens:
      - shop_order.(user, created_at)   — order history, newest first
      - shop_order.status               (admin filter WHERE status = ...)
      - shop_order.created_at           (admin date range filter)
    """

    dependencies = [
        ('shop', '0001_initial'),
    ]

    operations = [
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['user', 'created_at'], name='shop_order_user_created_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['status'], name='shop_order_status_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['created_at'], name='shop_order_created_at_idx'),
        ),
    ]
