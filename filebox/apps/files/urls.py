from django.urls import path

from filebox.apps.files import views

app_name = 'files'

urlpatterns = [
    path('upload', views.upload, name='upload'),
    path('files', views.files, name='files'),
    path('files/<int:file_id>', views.delete, name='delete'),
    path('files/<int:file_id>/download', views.download, name='download'),
    path('files/<int:file_id>/move', views.move, name='move'),
    path('folders', views.folders, name='folders'),
    path('usage', views.usage, name='usage'),
]
