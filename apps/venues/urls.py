from django.urls import path
from . import views

app_name = 'venues'

urlpatterns = [
    # POST /api/places/search/ - Nearby venue search
    path('search/', views.search_places, name='search'),
]
