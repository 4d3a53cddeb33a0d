from rest_framework import serializers

from .dtos import Cart
from .operations import format_amount, quantity_total, subtotal


class CartLineItemSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    name = serializers.CharField()
    unit_price = serializers.SerializerMethodField()
    image_ref = serializers.CharField(allow_blank=True)
    quantity = serializers.IntegerField()
    line_total = serializers.SerializerMethodField()

    def get_unit_price(self, item) -> str:
        return format_amount(item.unit_price)

    def get_line_total(self, item) -> str:
        return format_amount(item.line_total)


class CartSummarySerializer(serializers.Serializer):
    quantity_total = serializers.SerializerMethodField()
    subtotal = serializers.SerializerMethodField()

    def get_quantity_total(self, cart: Cart) -> int:
        return quantity_total(cart)

    def get_subtotal(self, cart: Cart) -> str:
        return format_amount(subtotal(cart))


class CartReadSerializer(CartSummarySerializer):
    items = CartLineItemSerializer(many=True)


class AddToCartSerializer(serializers.Serializer):
    # Both fields stay raw strings; the cart service owns quantity parsing.
    product_id = serializers.CharField(trim_whitespace=True)
    quantity = serializers.CharField(trim_whitespace=False, allow_blank=True)
