from rest_framework import serializers


class PaymentIntentSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    amount = serializers.CharField()
    currency = serializers.CharField(source="currency_code")
    status = serializers.CharField()


class CaptureResultSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    capture_id = serializers.CharField()
    status = serializers.CharField()
