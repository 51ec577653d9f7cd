from django.urls import path

from .views import CheckoutView, ProductInquiryView

urlpatterns = [
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path(
        "products/<int:product_id>/inquiry/",
        ProductInquiryView.as_view(),
        name="products-inquiry",
    ),
]
