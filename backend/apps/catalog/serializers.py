from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.CharField()
    image_url = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    created_at = serializers.CharField(allow_blank=True)
