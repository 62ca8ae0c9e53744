"""Request forms for file and folder endpoints."""

from django import forms


class UploadForm(forms.Form):
    """Multipart upload: a single ``file`` field."""

    file = forms.FileField(
        error_messages={'required': 'No file uploaded'},
    )


class FolderForm(forms.Form):
    """Folder creation request."""

    name = forms.CharField(
        max_length=255,
        error_messages={'required': 'Folder name is required'},
    )


class MoveFileForm(forms.Form):
    """Move request; an empty ``folderId`` unfiles the file."""

    folder_id = forms.IntegerField(required=False, min_value=1)

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> 'MoveFileForm':
        """Bind the client's camelCase payload."""
        return cls({'folder_id': payload.get('folderId')})
