from django.urls import path

from .views import SymptomAdviceView

urlpatterns = [
    path("advice/", SymptomAdviceView.as_view(), name="api-assistant-advice"),
]
