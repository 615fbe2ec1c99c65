from django.urls import path
from . import views

app_name = 'tickets'

urlpatterns = [
    # Admin inventory management
    path('import/', views.import_codes, name='import'),
    path('import-csv/', views.import_csv, name='import-csv'),
    path('delete/', views.delete_codes, name='delete'),

    # Claim and return
    path('next/', views.next_code, name='next'),
    path('consume/', views.consume_code, name='consume'),
    path('append/', views.append_code, name='append'),

    # Inventory views
    path('available/', views.available_codes, name='available'),
    path('count/', views.count_codes, name='count'),
    path('mine/', views.my_codes, name='mine'),
]
