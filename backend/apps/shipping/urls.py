from django.urls import path

from .views import DepartmentDetailView, DepartmentListView, LocationDetectView

urlpatterns = [
    path(
        "shipping/departments/",
        DepartmentListView.as_view(),
        name="shipping-departments-list",
    ),
    path(
        "shipping/departments/<str:key>/",
        DepartmentDetailView.as_view(),
        name="shipping-departments-detail",
    ),
    path("shipping/detect/", LocationDetectView.as_view(), name="shipping-detect"),
]
