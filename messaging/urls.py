from django.urls import path
from . import views

app_name = 'messaging'

urlpatterns = [
    path('', views.conversations_list, name='conversations_list'),
    path('unread', views.unread_counts, name='unread_counts'),
    path('start', views.start_conversation, name='start_conversation'),
    path('conversation/<uuid:conversation_id>', views.conversation_detail, name='conversation_detail'),
    path('conversation/<uuid:conversation_id>/send', views.send_message, name='send_message'),
]
