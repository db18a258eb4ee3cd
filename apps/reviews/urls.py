from django.urls import path
from . import views

app_name = 'reviews'

urlpatterns = [
    # GET  /api/reviews/  - Recent reviews
    # POST /api/reviews/  - Leave a review (authenticated)
    path('', views.reviews, name='reviews'),
]
