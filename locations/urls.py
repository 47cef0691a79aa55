from django.urls import path

from .views import LocationDetailView, LocationListCreateView

urlpatterns = [
    path("", LocationListCreateView.as_view(), name="location-list"),
    path("<int:location_id>/", LocationDetailView.as_view(), name="location-detail"),
]

# EOF
