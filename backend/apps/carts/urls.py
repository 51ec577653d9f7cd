from django.urls import path
from .views import CartItemDetailView, CartItemListView, CartView

urlpatterns = [
    path("cart/", CartView.as_view(), name="cart-detail"),
    path("cart/items/", CartItemListView.as_view(), name="cart-items-list"),
    # Keys look like "12" or "12::red"
    path("cart/items/<str:key>/", CartItemDetailView.as_view(), name="cart-items-detail"),
]
