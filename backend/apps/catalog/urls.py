from django.urls import path
from .views import (
    CategoryListView,
    FeaturedProductListView,
    ProductCommentListView,
    ProductDetailView,
    ProductListView,
)

urlpatterns = [
    path('products/', ProductListView.as_view(), name='api-products-list'),
    path('products/featured/', FeaturedProductListView.as_view(), name='api-products-featured'),
    path('products/<int:product_id>/', ProductDetailView.as_view(), name='api-products-detail'),
    path(
        'products/<int:product_id>/comments/',
        ProductCommentListView.as_view(),
        name='api-products-comments',
    ),
    path('categories/', CategoryListView.as_view(), name='api-categories-list'),
]
