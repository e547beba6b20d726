from django.urls import path
from . import views

app_name = 'profiles'

urlpatterns = [
    path('mood', views.mood, name='mood'),
    path('preferences', views.preferences, name='preferences'),
    path('<int:user_id>', views.profile_view, name='profile_view'),
]
