from rest_framework import serializers


class PrescriptionReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    prescription_ref = serializers.CharField()
    notes = serializers.CharField(allow_blank=True)
    status = serializers.CharField()
    created_at = serializers.DateTimeField(allow_null=True)


class PrescriptionCreateSerializer(serializers.Serializer):
    prescriptionRef = serializers.CharField(max_length=512)
    notes = serializers.CharField(required=False, allow_blank=True)


class OrderReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    status = serializers.CharField()
    delivery_address = serializers.CharField()
    medicine_details = serializers.JSONField()
    prescription_id = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)


class OrderCreateSerializer(serializers.Serializer):
    deliveryAddress = serializers.CharField(max_length=500)
    prescriptionId = serializers.UUIDField(required=False)
    # Set for a free-text order; omitted to order the cart contents.
    medicines = serializers.CharField(required=False)
    quantity = serializers.IntegerField(required=False, min_value=1)
