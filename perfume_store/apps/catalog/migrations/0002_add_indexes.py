from django.db import migrations, models


class Migration(migrations.Migration):
    """
    Add indexes on the columns the storefront filters on:
      - catalog_perfume.category   (WHERE category = ...)
      - catalog_perfume.stock      (WHERE stock > 0, ORDER BY stock for trending)
      - catalog_promotion.(perfume, is_active, start_date, end_date)
        composite — covers the "running today" lookup per perfume
    """

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.AddIndex(
            model_name='perfume',
            index=models.Index(fields=['category'], name='catalog_perfume_category_idx'),
        ),
        migrations.AddIndex(
            model_name='perfume',
            index=models.Index(fields=['stock'], name='catalog_perfume_stock_idx'),
        ),
        migrations.AddIndex(
            model_name='promotion',
            index=models.Index(
                fields=['perfume', 'is_active', 'start_date', 'end_date'],
                name='catalog_promo_running_idx',
            ),
        ),
    ]
