"""
Canteen URL Configuration.
"""

from django.urls import path

from canteen.views import daily_procurement_view

app_name = "canteen"

urlpatterns = [
    path("daily-procurement/", daily_procurement_view, name="daily_procurement"),
]
