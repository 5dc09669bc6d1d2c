from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    path('', views.task_board, name='board'),
    path('history/', views.TaskHistoryView.as_view(), name='history'),
    path('<uuid:task_id>/complete/', views.complete, name='complete'),
]
