from django.urls import path, re_path

from .views import CaptureView, PayView

urlpatterns = [
    path("pay/", PayView.as_view(), name="api-checkout-pay"),
    re_path(
        r"^orders/(?P<order_id>[A-Za-z0-9-]+)/capture/$",
        CaptureView.as_view(),
        name="api-checkout-capture",
    ),
]
