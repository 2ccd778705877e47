"""Tests for FragmentService flows."""

import pytest

from fragments.exceptions import (
    NotFoundError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from fragments.schemas.fragments import ExpandedFragmentListResponse, FragmentListResponse
from fragments.services.fragment_service import FragmentService


@pytest.fixture
def service(backend):
    return FragmentService(backend)


def test_create_fragment(service):
    created = service.create_fragment('user1', 'text/plain', b'This is a fragment')

    assert created.owner_id == 'user1'
    assert created.type == 'text/plain'
    assert created.size == 18
    assert created.formats == ['text/plain']


def test_create_rejects_unsupported_type(service):
    with pytest.raises(ValidationError):
        service.create_fragment('user1', 'application/msword', b'doc')


def test_create_rejects_non_bytes(service):
    with pytest.raises(ValidationError):
        service.create_fragment('user1', 'text/plain', 'text')
    assert service.list_fragments('user1').fragments == []


def test_list_fragments(service):
    first = service.create_fragment('user1', 'text/plain', b'a')
    second = service.create_fragment('user1', 'application/json', b'{}')
    service.create_fragment('user2', 'text/plain', b'b')

    listing = service.list_fragments('user1')
    assert isinstance(listing, FragmentListResponse)
    assert listing.fragments == [first.id, second.id]


def test_list_fragments_expanded(service):
    created = service.create_fragment('user1', 'text/markdown', b'# hi')

    listing = service.list_fragments('user1', expand=True)

    assert isinstance(listing, ExpandedFragmentListResponse)
    assert listing.fragments[0].id == created.id
    assert listing.fragments[0].size == 4
    assert listing.model_dump(by_alias=True)['fragments'][0]['ownerId'] == 'user1'


def test_get_fragment_info(service):
    created = service.create_fragment('user1', 'text/plain', b'abc')
    info = service.get_fragment_info('user1', created.id)
    assert info.id == created.id
    assert info.size == 3


def test_get_fragment_info_other_owner(service):
    created = service.create_fragment('user1', 'text/plain', b'abc')
    with pytest.raises(NotFoundError):
        service.get_fragment_info('user2', created.id)


def test_get_raw_data_keeps_full_type(service):
    created = service.create_fragment('user1', 'text/plain; charset=utf-8', b'frag')

    data, mime_type = service.get_fragment_data('user1', created.id)

    assert data == b'frag'
    assert mime_type == 'text/plain; charset=utf-8'


def test_get_converted_data(service):
    created = service.create_fragment('user1', 'text/markdown', b'# hello')

    assert service.get_fragment_data('user1', f'{created.id}.html') == (b'<h1>hello</h1>\n', 'text/html')
    assert service.get_fragment_data('user1', f'{created.id}.txt') == (b'# hello', 'text/plain')


def test_get_data_unsupported_extension(service):
    created = service.create_fragment('user1', 'text/plain', b'frag')
    with pytest.raises(UnsupportedMediaTypeError):
        service.get_fragment_data('user1', f'{created.id}.html')


def test_get_data_unknown_id(service):
    service.create_fragment('user1', 'text/plain', b'frag')
    with pytest.raises(NotFoundError):
        service.get_fragment_data('user1', 'missing.txt')


def test_update_fragment(service):
    created = service.create_fragment('user1', 'text/plain', b'old')

    updated = service.update_fragment('user1', created.id, 'text/plain; charset=utf-8', b'new data')

    assert updated.size == 8
    assert updated.type == 'text/plain'
    assert updated.created == created.created
    assert service.get_fragment_data('user1', created.id).data == b'new data'


def test_update_rejects_type_change(service):
    created = service.create_fragment('user1', 'text/plain', b'old')

    with pytest.raises(ValidationError):
        service.update_fragment('user1', created.id, 'text/html', b'<p>new</p>')

    assert service.get_fragment_data('user1', created.id).data == b'old'


def test_update_unknown_id(service):
    with pytest.raises(NotFoundError):
        service.update_fragment('user1', 'missing', 'text/plain', b'x')


def test_delete_fragment(service):
    created = service.create_fragment('user1', 'text/plain', b'abc')

    service.delete_fragment('user1', created.id)

    with pytest.raises(NotFoundError):
        service.get_fragment_info('user1', created.id)
    with pytest.raises(NotFoundError):
        service.delete_fragment('user1', created.id)


def test_works_with_persistent_backend(sqlite_backend):
    service = FragmentService(sqlite_backend)
    created = service.create_fragment('user1@example.com', 'text/markdown', b'# hello')

    assert service.list_fragments('user1@example.com').fragments == [created.id]
    assert service.get_fragment_data('user1@example.com', f'{created.id}.html').data == b'<h1>hello</h1>\n'

    service.delete_fragment('user1@example.com', created.id)
    assert service.list_fragments('user1@example.com').fragments == []


@pytest.mark.parametrize('error, code', [
    (ValidationError('bad'), 'VALIDATION_ERROR'),
    (NotFoundError('gone'), 'NOT_FOUND'),
    (UnsupportedMediaTypeError('nope'), 'UNSUPPORTED_MEDIA_TYPE'),
    (StorageError('disk'), 'STORAGE_ERROR'),
])
def test_error_response(error, code):
    response = FragmentService.error_response(error)
    assert response.code == code
    assert response.detail == str(error)


def test_create_service_wires_backend():
    from fragments.bootstrap import create_service
    from fragments.storage import MemoryMetadataStore

    service = create_service('memory', log_level='WARNING')

    assert isinstance(service.backend.metadata, MemoryMetadataStore)
    assert service.list_fragments('anyone').fragments == []
