"""Tests for the upload orchestration service."""

import pytest
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from recipients.exceptions import ClientInputError, RecipientNotFound, UpstreamPinningError


def test_upload_success(service, make_upload, pinata_stub):
    """Test a valid upload is buffered, pinned once and recorded."""
    outcome = service.upload(file_obj=make_upload('a.txt', b'hello'), recipient='alice')

    assert len(pinata_stub.requests) == 1
    assert outcome.file.size == 5
    assert outcome.pinata['cid'] == 'bafkreitestcid'
    assert outcome.recipient['name'] == 'alice'
    entry = outcome.recipient['files'][0]
    assert entry['originalname'] == 'a.txt'
    assert entry['filename'] == outcome.file.filename
    assert entry['pinata'] == outcome.pinata


def test_upload_without_file(service, pinata_stub, mongo_db):
    """Test a missing file part stops before pinning or persistence."""
    with pytest.raises(ClientInputError) as exc_info:
        service.upload(file_obj=None, recipient='alice')

    assert str(exc_info.value.detail) == 'No file uploaded'
    assert pinata_stub.requests == []
    assert mongo_db.recipients.count_documents({}) == 0


@pytest.mark.parametrize('recipient', [None, ''])
def test_upload_without_recipient_pins_first(service, make_upload, pinata_stub, mongo_db, recipient):
    """Test the recipient is only checked after the file is pinned."""
    with pytest.raises(ClientInputError) as exc_info:
        service.upload(file_obj=make_upload(), recipient=recipient)

    assert str(exc_info.value.detail) == 'Missing recipient in request body'
    assert len(pinata_stub.requests) == 1
    assert mongo_db.recipients.count_documents({}) == 0


def test_upload_pinning_failure(service, make_upload, pinata_stub, mongo_db):
    """Test a pinning error aborts the upload and carries upstream details."""
    pinata_stub.status_code = 401
    pinata_stub.error_body = {'error': {'reason': 'INVALID_CREDENTIALS'}}

    with pytest.raises(UpstreamPinningError) as exc_info:
        service.upload(file_obj=make_upload(), recipient='alice')

    assert exc_info.value.details == {'error': {'reason': 'INVALID_CREDENTIALS'}}
    assert '401' in str(exc_info.value.detail)
    assert mongo_db.recipients.count_documents({}) == 0


def test_upload_storage_failure_keeps_pin(service, make_upload, monkeypatch):
    """Test a failed append still returns the pin result."""
    def broken_append(recipient_name, entry):
        raise PyMongoError('connection closed')

    monkeypatch.setattr(service.repository, 'append_file', broken_append)

    outcome = service.upload(file_obj=make_upload(), recipient='alice')

    assert outcome.recipient is None
    assert outcome.pinata['cid'] == 'bafkreitestcid'


def test_upload_encoding_failure_keeps_pin(service, make_upload, monkeypatch):
    """Test a document that cannot be encoded does not fail a pinned upload."""
    def unencodable_append(recipient_name, entry):
        raise InvalidDocument('cannot encode object')

    monkeypatch.setattr(service.repository, 'append_file', unencodable_append)

    outcome = service.upload(file_obj=make_upload(), recipient='alice')

    assert outcome.recipient is None
    assert outcome.pinata['cid'] == 'bafkreitestcid'


def test_upload_non_text_recipient(service, make_upload, pinata_stub, mongo_db):
    """Test a recipient that is not text is treated as missing."""
    with pytest.raises(ClientInputError):
        service.upload(file_obj=make_upload(), recipient=make_upload('r.txt', b'bob'))

    assert len(pinata_stub.requests) == 1
    assert mongo_db.recipients.count_documents({}) == 0


def test_find_files_by_name(service, make_upload):
    service.upload(file_obj=make_upload('a.txt'), recipient='alice')

    recipient = service.find_files(identifier='alice')

    assert recipient['name'] == 'alice'
    assert len(recipient['files']) == 1


def test_find_files_unknown(service):
    with pytest.raises(RecipientNotFound):
        service.find_files(identifier='nobody')
