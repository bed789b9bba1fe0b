from tortoise import fields, models


class StateBlob(models.Model):
    """
    Key-value blob table. Each row holds one serialized state snapshot
    under its namespace key.
    """
    key = fields.CharField(max_length=128, primary_key=True)
    value = fields.TextField() # JSON snapshot of {stock, menu, sales}
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "state_blobs"
