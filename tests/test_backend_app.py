from io import BytesIO

import pytest

from backend.app import App
from config_manager import ConfigManager


@pytest.fixture
def application(tmp_path):
    return App(ConfigManager(str(tmp_path / "converter_config.json")))


@pytest.fixture
def client(application):
    application.app.config['TESTING'] = True
    return application.app.test_client()


def post_file(client, data, name="quote.xlsx"):
    return client.post(
        '/api/convert',
        data={'file': (BytesIO(data), name)},
        content_type='multipart/form-data'
    )


def post_chunk(client, upload_id, index, total, data):
    return client.post(
        '/api/upload-chunk',
        data={
            'uploadId': upload_id,
            'chunkIndex': str(index),
            'totalChunks': str(total),
            'fileName': 'quote.xlsx',
            'chunk': (BytesIO(data), 'blob'),
        },
        content_type='multipart/form-data'
    )


class TestConvertRoute:
    def test_direct_upload(self, client, quote_workbook_bytes):
        response = post_file(client, quote_workbook_bytes)

        assert response.status_code == 200
        body = response.get_json()
        assert [room['name'] for room in body['rooms']] == ["Flat 402 - Kitchen"]
        assert body['summary']['totalPayable'] == 7000

    def test_missing_file(self, client):
        response = client.post('/api/convert', data={}, content_type='multipart/form-data')

        assert response.status_code == 400
        body = response.get_json()
        assert body['success'] is False
        assert body['error'] == "Missing Excel file upload"
        assert body['stage'] == 'upload'

    def test_unreadable_workbook(self, client):
        response = post_file(client, b"not a workbook")

        assert response.status_code == 400
        assert response.get_json()['stage'] == 'convert'

    def test_workbook_without_rooms(self, client, workbook_bytes):
        response = post_file(client, workbook_bytes({"Summary": [["ROOM", "TOTAL"]]}))

        assert response.status_code == 400
        assert "No recognizable" in response.get_json()['error']

    def test_unexpected_failure_is_500(self, application, client, quote_workbook_bytes, monkeypatch):
        def boom(data):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(application.converter, 'convert', boom)
        response = post_file(client, quote_workbook_bytes)

        assert response.status_code == 500
        assert response.get_json()['error'] == "disk on fire"


class TestChunkedUpload:
    def test_chunks_reassemble_and_convert(self, client, quote_workbook_bytes):
        half = len(quote_workbook_bytes) // 2
        first, second = quote_workbook_bytes[:half], quote_workbook_bytes[half:]

        response = post_chunk(client, 'u1', 1, 2, second)
        assert response.get_json() == {
            'success': True, 'uploadId': 'u1', 'complete': False, 'received': 1, 'total': 2
        }

        status = client.get('/api/upload-chunk?uploadId=u1').get_json()
        assert status == {'complete': False, 'received': 1, 'total': 2}

        early = client.post('/api/convert', data={'uploadId': 'u1'})
        assert early.status_code == 409

        response = post_chunk(client, 'u1', 0, 2, first)
        body = response.get_json()
        assert body['complete'] is True
        assert body['message'] == "File upload complete"

        download = client.get('/api/upload-chunk?uploadId=u1')
        assert download.status_code == 200
        assert download.data == quote_workbook_bytes

        converted = client.post('/api/convert', data={'uploadId': 'u1'})
        assert converted.status_code == 200
        assert converted.get_json()['meta']['quoteNumber'] == "QUOTE-1042"

        assert client.get('/api/upload-chunk?uploadId=u1').status_code == 404

    def test_unknown_upload(self, client):
        assert client.post('/api/convert', data={'uploadId': 'nope'}).status_code == 404
        assert client.get('/api/upload-chunk?uploadId=nope').status_code == 404

    def test_status_requires_upload_id(self, client):
        assert client.get('/api/upload-chunk').status_code == 400

    def test_missing_chunk_data(self, client):
        response = client.post('/api/upload-chunk', data={'uploadId': 'u2'}, content_type='multipart/form-data')

        assert response.status_code == 400
        assert response.get_json()['error'] == "Missing required chunk data"

    def test_chunk_index_out_of_range(self, client):
        assert post_chunk(client, 'u3', 2, 2, b"x").status_code == 400

    def test_chunk_total_changed_mid_upload(self, client):
        assert post_chunk(client, 'u4', 0, 2, b"a").status_code == 200

        response = post_chunk(client, 'u4', 2, 3, b"c")

        assert response.status_code == 400
        assert response.get_json()['stage'] == 'upload'
        status = client.get('/api/upload-chunk?uploadId=u4').get_json()
        assert status == {'complete': False, 'received': 1, 'total': 2}


class TestConfigRoutes:
    def test_inquiry(self, client):
        body = client.get('/api/config/inquiry').get_json()

        assert body['success'] is True
        assert body['configs']['parser']['summary_sheet_name'] == "Summary"
        assert body['configs']['upload']['chunk_size_mb'] == 3

    def test_update_reloads_converter(self, application, client):
        response = client.post('/api/config/update', json={
            'section': 'parser',
            'values': {'summary_sheet_name': 'Overview'}
        })

        assert response.status_code == 200
        assert response.get_json()['updated_section'] == 'parser'
        assert application.converter.config.summary_sheet_name == 'Overview'

    @pytest.mark.parametrize("body", [
        {'section': 'parser', 'values': {'bogus': 1}},
        {'section': 'parser', 'values': {'discount_noise_threshold': -1}},
        {'section': 'nowhere', 'values': {'x': 1}},
        {'section': 'upload', 'values': {}},
    ])
    def test_rejected_updates(self, client, body):
        response = client.post('/api/config/update', json=body)

        assert response.status_code == 400
        assert response.get_json()['success'] is False
