from django.urls import path
from . import views

app_name = 'prices'

urlpatterns = [
    # POST /api/price-reports/submit/        - Submit a price (guests allowed)
    path('submit/', views.submit_price, name='submit'),
    # POST /api/price-reports/place-prices/  - Latest approved price per place
    path('place-prices/', views.place_prices, name='place-prices'),
]
