from django.urls import path

from .views import OrderListView, PrescriptionListView

urlpatterns = [
    path("", OrderListView.as_view(), name="api-orders"),
    path("prescriptions/", PrescriptionListView.as_view(), name="api-prescriptions"),
]
