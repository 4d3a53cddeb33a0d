from django.urls import path

from .views import CartClearView, CartItemsView, CartSummaryView, CartView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemsView.as_view(), name="api-cart-items"),
    path("clear/", CartClearView.as_view(), name="api-cart-clear"),
    path("summary/", CartSummaryView.as_view(), name="api-cart-summary"),
]
