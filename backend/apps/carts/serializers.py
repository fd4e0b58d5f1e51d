from rest_framework import serializers

from apps.store.serializers import ProductReadSerializer


class CartLineSerializer(serializers.Serializer):
    id = serializers.CharField()
    product = ProductReadSerializer()
    quantity = serializers.IntegerField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartReadSerializer(serializers.Serializer):
    owner_id = serializers.CharField()
    lines = CartLineSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()


class CartAddSerializer(serializers.Serializer):
    productId = serializers.UUIDField()


class CartQuantitySerializer(serializers.Serializer):
    # Zero or negative removes the line.
    quantity = serializers.IntegerField()
