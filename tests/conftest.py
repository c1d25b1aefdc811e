"""Shared fixtures: in-memory MongoDB, mocked Pinata, tmp upload buffer."""

import httpx
import mongomock
import pytest
from django.apps import apps
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from pinning_internals.clients import PinataClient
from recipients.repository import RecipientRepository
from recipients.services import RecipientFileService
from recipients.uploads import UploadBuffer


def pinata_data(name, size, cid='bafkreitestcid'):
    """Shape of the `data` object Pinata returns for an upload."""
    return {
        'id': f'file-{name}',
        'name': name,
        'cid': cid,
        'size': size,
        'number_of_files': 1,
        'mime_type': 'application/octet-stream',
        'group_id': None,
        'keyvalues': {},
        'created_at': '2026-10-17T12:00:00.000Z',
    }


class PinataStub:
    """Records every request and answers like Pinata's uploads endpoint."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.error_body = None

    def __call__(self, request):
        body = request.read()
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json=self.error_body)
        return httpx.Response(200, json={'data': pinata_data(f'upload-{len(self.requests)}', len(body))})


@pytest.fixture
def mongo_db():
    """In-memory MongoDB database.

    Returns:
        mongomock Database.
    """
    return mongomock.MongoClient(tz_aware=True)['dokchain_test']


@pytest.fixture
def repository(mongo_db):
    """Recipient repository with its indexes in place."""
    repository = RecipientRepository(mongo_db)
    repository.ensure_indexes()
    return repository


@pytest.fixture
def pinata_stub():
    return PinataStub()


@pytest.fixture
def pinning_client(pinata_stub):
    """PinataClient whose HTTP traffic goes to the stub."""
    return PinataClient(
        jwt='test-jwt',
        gateway_url='gateway.example.com',
        uploads_url='https://uploads.pinata.test/v3/files',
        transport=httpx.MockTransport(pinata_stub),
    )


@pytest.fixture
def upload_buffer(tmp_path):
    """Upload buffer writing under tmp_path/uploads.

    Returns:
        UploadBuffer whose relative paths are computed from tmp_path.
    """
    storage = FileSystemStorage(location=tmp_path / 'uploads')
    return UploadBuffer(storage, base_dir=tmp_path)


@pytest.fixture
def service(upload_buffer, pinning_client, repository):
    return RecipientFileService(
        upload_buffer=upload_buffer,
        pinning_client=pinning_client,
        repository=repository,
    )


@pytest.fixture
def installed_service(service, monkeypatch):
    """Install the test service as the process-wide one the views use."""
    monkeypatch.setattr(apps.get_app_config('recipients'), 'service', service)
    return service


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_upload():
    """Factory for uploaded file parts.

    Returns:
        Callable building a SimpleUploadedFile.
    """
    def factory(name='a.txt', content=b'hello', content_type='text/plain'):
        return SimpleUploadedFile(name, content, content_type=content_type)
    return factory
