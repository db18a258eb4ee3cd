from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # GET /api/products/?category=beer|wine|spirits[&spirit=Name]
    path('', views.list_products, name='list'),
]
