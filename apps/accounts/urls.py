from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('admin/login/', views.admin_login, name='admin-login'),

    # Current user
    path('me/', views.get_current_user, name='current-user'),
]
