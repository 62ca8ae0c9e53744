"""Tests for file operations business logic."""

from io import BytesIO

import pytest
from django.db import DatabaseError

from filebox.apps.core.exceptions import InvalidRequestError
from filebox.apps.files.exceptions import (
    NotFoundError,
    RejectedTypeError,
    StorageInconsistencyError,
    TooLargeError,
    WriteFailureError,
)
from filebox.apps.files.infrastructure import object_store
from filebox.apps.files.infrastructure.object_store import (
    PlacedContent,
    content_exists,
    iter_stored_handles,
    remove_content,
)
from filebox.apps.files.logic import file_operations
from filebox.apps.files.logic.file_operations import (
    create_file,
    delete_file,
    get_file,
    list_files,
    move_file,
    open_file,
    upload_file,
)
from filebox.apps.files.logic.folder_operations import (
    create_folder,
    list_folders,
)
from filebox.apps.files.models import File, OrphanedContent

_MIB = 1024 * 1024


@pytest.mark.django_db
class TestUploadFile:
    """Tests for upload_file."""

    def test_upload_file_success(self, principal, sample_file_content):
        """Test successful upload (storage + DB)."""
        file_instance = upload_file(
            principal,
            sample_file_content,
            'test.txt',
        )

        assert file_instance.id is not None
        assert file_instance.user_id == principal.id
        assert file_instance.name == 'test.txt'
        assert file_instance.folder is None
        assert file_instance.size_bytes == len(b'test file content')
        assert file_instance.mime_type == 'text/plain'
        assert len(file_instance.checksum_sha256) == 64
        assert file_instance.storage_handle.startswith(f'{principal.id}/')
        assert content_exists(file_instance.storage_handle)

    def test_upload_file_on_s3(self, principal, mock_s3):
        """Test upload through the S3 backend."""
        file_instance = upload_file(principal, BytesIO(b'%PDF-1.4'), 'cv.pdf')

        stored = mock_s3.Object('filebox', file_instance.storage_handle).get()
        assert stored['Body'].read() == b'%PDF-1.4'

    def test_upload_four_mib_roundtrip(self, principal):
        """A 4 MiB PDF is stored and downloaded byte for byte."""
        payload = bytes(range(256)) * (4 * _MIB // 256)

        file_instance = upload_file(principal, BytesIO(payload), 'big.pdf')
        download = open_file(principal, file_instance.id)

        with download.content:
            assert download.content.read() == payload
        assert download.size_bytes == 4 * _MIB
        assert download.mime_type == 'application/pdf'

    def test_upload_six_mib_rejected(self, principal):
        """Uploads over 5 MiB leave no record and no content."""
        with pytest.raises(TooLargeError):
            upload_file(principal, BytesIO(b'a' * 6 * _MIB), 'big.pdf')

        assert not File.objects.exists()
        assert list(iter_stored_handles()) == []

    def test_upload_declared_size_rejected_early(self, principal, monkeypatch):
        """A declared size over the limit fails before reading."""

        def unexpected_place(*args, **kwargs):
            raise AssertionError('content must not be placed')

        monkeypatch.setattr(file_operations, 'place_content', unexpected_place)

        with pytest.raises(TooLargeError):
            upload_file(
                principal,
                BytesIO(b'tiny'),
                'big.pdf',
                declared_size=6 * _MIB,
            )

    def test_upload_rejected_type(self, principal):
        """Executables are rejected; nothing is stored."""
        with pytest.raises(RejectedTypeError):
            upload_file(principal, BytesIO(b'MZ'), 'setup.exe')

        assert not File.objects.exists()
        assert list(iter_stored_handles()) == []

    def test_upload_rejected_content_type(self, principal):
        """A declared type contradicting the extension is rejected."""
        with pytest.raises(RejectedTypeError):
            upload_file(
                principal,
                BytesIO(b'<html>'),
                'page.txt',
                content_type='text/html',
            )

    def test_upload_empty_name(self, principal):
        """A name with nothing usable is an invalid request."""
        with pytest.raises(InvalidRequestError):
            upload_file(principal, BytesIO(b'x'), '   ')

    def test_upload_same_name_twice(self, principal):
        """Same display name, two records, two handles."""
        first = upload_file(principal, BytesIO(b'one'), 'a.txt')
        second = upload_file(principal, BytesIO(b'two'), 'a.txt')

        assert first.name == second.name == 'a.txt'
        assert first.storage_handle != second.storage_handle

    def test_upload_write_failure_leaves_no_record(self, principal, monkeypatch):
        """Failing storage creates no record."""

        def failing_place(*args, **kwargs):
            raise WriteFailureError()

        monkeypatch.setattr(file_operations, 'place_content', failing_place)

        with pytest.raises(WriteFailureError):
            upload_file(principal, BytesIO(b'x'), 'a.txt')

        assert not File.objects.exists()

    def test_upload_record_failure_removes_content(self, principal, monkeypatch):
        """If the record cannot be created the content is removed."""

        def failing_create(*args, **kwargs):
            raise DatabaseError('insert failed')

        monkeypatch.setattr(file_operations, 'create_file', failing_create)

        with pytest.raises(DatabaseError):
            upload_file(principal, BytesIO(b'x'), 'a.txt')

        assert list(iter_stored_handles()) == []
        assert not OrphanedContent.objects.exists()

    def test_upload_record_and_removal_failure_marks_orphan(
        self,
        principal,
        monkeypatch,
    ):
        """If removal also fails the content is marked for the sweep."""

        def failing_create(*args, **kwargs):
            raise DatabaseError('insert failed')

        def failing_remove(handle):
            raise WriteFailureError()

        monkeypatch.setattr(file_operations, 'create_file', failing_create)
        monkeypatch.setattr(
            'filebox.apps.files.logic.orphan_operations.remove_content',
            failing_remove,
        )

        with pytest.raises(DatabaseError):
            upload_file(principal, BytesIO(b'x'), 'a.txt')

        orphan = OrphanedContent.objects.get()
        assert orphan.reason == OrphanedContent.Reason.UPLOAD_ROLLBACK
        assert list(iter_stored_handles()) == [orphan.storage_handle]


@pytest.mark.django_db
def test_create_file_rejects_foreign_handle(principal, other_principal):
    """A handle under another user's prefix is refused."""
    placed = PlacedContent(
        handle=f'{other_principal.id}/{"0" * 32}.txt',
        size_bytes=1,
        checksum_sha256='a' * 64,
        mime_type='text/plain',
    )

    with pytest.raises(InvalidRequestError):
        create_file(principal, 'a.txt', placed)

    assert not File.objects.exists()


@pytest.mark.django_db
def test_create_file_records_placed_content(principal):
    """The record mirrors the placement result."""
    placed = object_store.place_content(
        BytesIO(b'abc'),
        'a.png',
        owner_id=principal.id,
    )

    file_instance = create_file(principal, 'a.png', placed)

    assert file_instance.storage_handle == placed.handle
    assert file_instance.size_bytes == 3
    assert file_instance.mime_type == 'image/png'


@pytest.mark.django_db
def test_list_files_user_isolation(principal, other_user, make_file):
    """Test that list_files only returns the caller's files."""
    mine = make_file()
    make_file(owner=other_user)

    assert list(list_files(principal)) == [mine]


@pytest.mark.django_db
def test_list_files_newest_first(principal, make_file):
    """Files are listed by upload time, newest first."""
    older = make_file(name='old.txt')
    newer = make_file(name='new.txt')

    assert list(list_files(principal)) == [newer, older]


@pytest.mark.django_db
def test_list_files_includes_filed_and_unfiled(principal, make_file):
    """Files in folders are listed too."""
    folder = create_folder(principal, 'Docs')
    make_file(folder=folder)
    make_file()

    assert list_files(principal).count() == 2


@pytest.mark.django_db
def test_get_file_foreign_same_as_missing(principal, other_user, make_file):
    """Foreign and absent files fail identically."""
    foreign = make_file(owner=other_user)

    with pytest.raises(NotFoundError) as foreign_error:
        get_file(principal, foreign.id)
    with pytest.raises(NotFoundError) as missing_error:
        get_file(principal, 99999)

    assert foreign_error.value.message == missing_error.value.message
    assert type(foreign_error.value) is type(missing_error.value)


@pytest.mark.django_db
class TestMoveFile:
    """Tests for move_file."""

    def test_move_into_folder_and_back(self, principal, make_file):
        """A file moves into a folder and out again."""
        folder = create_folder(principal, 'Photos')
        file_instance = make_file()

        moved = move_file(principal, file_instance.id, folder.id)
        assert moved.folder_id == folder.id
        assert list(folder.files.all()) == [file_instance]

        unfiled = move_file(principal, file_instance.id, None)
        assert unfiled.folder_id is None

    def test_move_keeps_content_handle(self, principal, make_file):
        """Only the record changes."""
        folder = create_folder(principal, 'Photos')
        file_instance = make_file()

        moved = move_file(principal, file_instance.id, folder.id)

        assert moved.storage_handle == file_instance.storage_handle

    def test_move_into_foreign_folder(self, principal, other_principal, make_file):
        """Another user's folder is treated as absent."""
        foreign_folder = create_folder(other_principal, 'Theirs')
        file_instance = make_file()

        with pytest.raises(NotFoundError):
            move_file(principal, file_instance.id, foreign_folder.id)

        file_instance.refresh_from_db()
        assert file_instance.folder_id is None

    def test_move_into_missing_folder(self, principal, make_file):
        """Test moving into a folder that does not exist."""
        file_instance = make_file()

        with pytest.raises(NotFoundError):
            move_file(principal, file_instance.id, 99999)

    def test_move_foreign_file(self, principal, other_user, make_file):
        """Another user's file cannot be moved."""
        folder = create_folder(principal, 'Mine')
        foreign = make_file(owner=other_user)

        with pytest.raises(NotFoundError):
            move_file(principal, foreign.id, folder.id)

        foreign.refresh_from_db()
        assert foreign.folder_id is None


@pytest.mark.django_db
class TestDeleteFile:
    """Tests for delete_file."""

    def test_delete_file_success(
        self,
        principal,
        django_capture_on_commit_callbacks,
    ):
        """Record and content are both removed."""
        file_instance = upload_file(principal, BytesIO(b'x'), 'a.txt')
        handle = file_instance.storage_handle

        with django_capture_on_commit_callbacks(execute=True):
            delete_file(principal, file_instance.id)

        assert not File.objects.filter(id=file_instance.id).exists()
        assert not content_exists(handle)

    def test_delete_removes_content_only_after_commit(
        self,
        principal,
        django_capture_on_commit_callbacks,
    ):
        """Content removal waits for the transaction to commit."""
        file_instance = upload_file(principal, BytesIO(b'x'), 'a.txt')
        handle = file_instance.storage_handle

        with django_capture_on_commit_callbacks() as callbacks:
            delete_file(principal, file_instance.id)
            assert content_exists(handle)

        assert len(callbacks) == 1

    def test_delete_file_not_found(self, principal):
        """Test deleting non-existent file."""
        with pytest.raises(NotFoundError):
            delete_file(principal, 99999)

    def test_delete_foreign_file(self, principal, other_user, make_file):
        """Another user's file is not deleted."""
        foreign = make_file(owner=other_user)

        with pytest.raises(NotFoundError):
            delete_file(principal, foreign.id)

        assert File.objects.filter(id=foreign.id).exists()

    def test_delete_file_with_missing_content(
        self,
        principal,
        django_capture_on_commit_callbacks,
    ):
        """Content already gone still counts as removed."""
        file_instance = upload_file(principal, BytesIO(b'x'), 'a.txt')
        remove_content(file_instance.storage_handle)

        with django_capture_on_commit_callbacks(execute=True):
            delete_file(principal, file_instance.id)

        assert not File.objects.exists()
        assert not OrphanedContent.objects.exists()

    def test_delete_removal_failure_marks_orphan(
        self,
        principal,
        monkeypatch,
        django_capture_on_commit_callbacks,
    ):
        """A failed removal leaves an orphan record; the delete stands."""
        file_instance = upload_file(principal, BytesIO(b'x'), 'a.txt')

        def failing_remove(handle):
            raise WriteFailureError()

        monkeypatch.setattr(
            'filebox.apps.files.logic.orphan_operations.remove_content',
            failing_remove,
        )

        with django_capture_on_commit_callbacks(execute=True):
            delete_file(principal, file_instance.id)

        assert not File.objects.exists()
        orphan = OrphanedContent.objects.get()
        assert orphan.storage_handle == file_instance.storage_handle
        assert orphan.reason == OrphanedContent.Reason.DELETE


@pytest.mark.django_db
class TestOpenFile:
    """Tests for open_file."""

    def test_open_file(self, principal):
        """Download carries the display name and bytes."""
        file_instance = upload_file(principal, BytesIO(b'hello'), 'hi.txt')

        download = open_file(principal, file_instance.id)

        with download.content:
            assert download.content.read() == b'hello'
        assert download.name == 'hi.txt'
        assert download.mime_type == 'text/plain'

    def test_open_foreign_file(self, principal, other_principal):
        """Another user's file is not found."""
        theirs = upload_file(other_principal, BytesIO(b'secret'), 's.txt')

        with pytest.raises(NotFoundError):
            open_file(principal, theirs.id)

    def test_open_file_content_missing(self, principal):
        """A record whose content vanished is a storage inconsistency."""
        file_instance = upload_file(principal, BytesIO(b'x'), 'a.txt')
        remove_content(file_instance.storage_handle)

        with pytest.raises(StorageInconsistencyError):
            open_file(principal, file_instance.id)


@pytest.mark.django_db
def test_alice_scenario(user, principal, django_capture_on_commit_callbacks):
    """Upload, file into a folder, list, download, delete."""
    upload = upload_file(principal, BytesIO(b'%PDF-1.7 report'), 'report.pdf')
    assert upload.folder_id is None

    folder = create_folder(principal, 'Work')
    move_file(principal, upload.id, folder.id)
    assert [item.id for item in folder.files.all()] == [upload.id]

    download = open_file(principal, upload.id)
    with download.content:
        assert download.content.read() == b'%PDF-1.7 report'

    with django_capture_on_commit_callbacks(execute=True):
        delete_file(principal, upload.id)

    assert not list_files(principal).exists()
    assert list(iter_stored_handles()) == []
    assert [item.files.count() for item in list_folders(principal)] == [0]
