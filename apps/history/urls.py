from django.urls import path
from . import views

app_name = 'history'

urlpatterns = [
    # GET  /api/history/?type=&userId=&limit=  - List entries newest-first
    # POST /api/history/                        - Append an entry
    path('', views.history, name='history'),
]
