"""JSON endpoints for files, folders and storage usage."""

from http import HTTPStatus

from django.http import FileResponse, HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from filebox.apps.accounts.decorators import principal_required
from filebox.apps.accounts.principal import Principal
from filebox.apps.core.http import clean_form, parse_json_body
from filebox.apps.files.exceptions import TooLargeError
from filebox.apps.files.forms import FolderForm, MoveFileForm, UploadForm
from filebox.apps.files.infrastructure.object_store import get_max_upload_bytes
from filebox.apps.files.logic.file_operations import (
    delete_file,
    list_files,
    move_file,
    open_file,
    upload_file,
)
from filebox.apps.files.logic.folder_operations import create_folder, list_folders
from filebox.apps.files.logic.usage_operations import get_storage_usage
from filebox.apps.files.serializers import (
    serialize_file,
    serialize_folder,
    serialize_usage,
)
from filebox.apps.files.upload_handlers import upload_limit_exceeded


@require_POST
@principal_required
def upload(request: HttpRequest, principal: Principal) -> JsonResponse:
    """Store an uploaded file and record it, unfiled."""
    # Reading FILES runs the upload handlers
    form = UploadForm(request.POST, request.FILES)
    if upload_limit_exceeded(request):
        raise TooLargeError(get_max_upload_bytes())
    uploaded = clean_form(form)['file']

    file_instance = upload_file(
        principal,
        uploaded,
        uploaded.name,
        declared_size=uploaded.size,
        content_type=uploaded.content_type,
    )
    return JsonResponse(
        {'message': 'File uploaded!', 'file': serialize_file(file_instance)},
        status=HTTPStatus.CREATED,
    )


@require_GET
@principal_required
def files(request: HttpRequest, principal: Principal) -> JsonResponse:
    """List the caller's files, newest first."""
    return JsonResponse({
        'files': [serialize_file(item) for item in list_files(principal)],
    })


@require_GET
@principal_required
def download(
    request: HttpRequest,
    principal: Principal,
    file_id: int,
) -> FileResponse:
    """Send a file's content as an attachment under its display name."""
    result = open_file(principal, file_id)
    response = FileResponse(
        result.content,
        as_attachment=True,
        filename=result.name,
        content_type=result.mime_type,
    )
    response['Content-Length'] = str(result.size_bytes)
    return response


@require_http_methods(['DELETE'])
@principal_required
def delete(
    request: HttpRequest,
    principal: Principal,
    file_id: int,
) -> JsonResponse:
    """Delete a file record and its content."""
    delete_file(principal, file_id)
    return JsonResponse({'message': 'File deleted successfully'})


@require_http_methods(['PATCH'])
@principal_required
def move(
    request: HttpRequest,
    principal: Principal,
    file_id: int,
) -> JsonResponse:
    """Put a file into a folder, or unfile it with ``folderId: null``."""
    data = clean_form(MoveFileForm.from_payload(parse_json_body(request)))
    file_instance = move_file(principal, file_id, data['folder_id'])
    return JsonResponse({
        'message': 'File moved!',
        'file': serialize_file(file_instance),
    })


@require_http_methods(['GET', 'POST'])
@principal_required
def folders(request: HttpRequest, principal: Principal) -> JsonResponse:
    """List folders with their files, or create one."""
    if request.method == 'POST':
        data = clean_form(FolderForm(parse_json_body(request)))
        folder = create_folder(principal, data['name'])
        return JsonResponse(
            {'message': 'Folder created!', 'folder': serialize_folder(folder)},
            status=HTTPStatus.CREATED,
        )

    return JsonResponse({
        'folders': [serialize_folder(item) for item in list_folders(principal)],
    })


@require_GET
@principal_required
def usage(request: HttpRequest, principal: Principal) -> JsonResponse:
    """Report bytes and file count stored by the caller."""
    return JsonResponse(serialize_usage(get_storage_usage(principal)))
