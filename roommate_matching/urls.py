from django.urls import path
from . import views

app_name = 'matching'

urlpatterns = [
    path('quiz', views.quiz, name='quiz'),
    path('matches', views.matches, name='matches'),
    path('roommates', views.find_roommates, name='find_roommates'),
    path('compatibility/<int:user_id>', views.compatibility_detail, name='compatibility_detail'),
]
