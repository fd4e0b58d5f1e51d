from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    category = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image_ref = serializers.CharField(allow_null=True)
    available_for_sale = serializers.BooleanField()
    requires_prescription = serializers.BooleanField()
