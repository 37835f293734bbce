"""
Tests for the contents API endpoints
"""
import json

import pytest


NEW_RECORD = {
    'File Name': 'api.mp4',
    'Post Title': 'Created through the API',
    'Description': 'API created record.',
    'Publication Date': '2026-03-02',
    'Duration': '2:10',
    'YouTube': '',
    'TikTok': '',
    'X.com': '',
    'Type': 'Primary',
    'Case': 'Trump v. CASA',
    'SCOTUS Docket no.': '24A884'
}


class TestListContents:
    """Tests for GET /api/contents"""

    def test_returns_collection_as_array(self, client, sample_contents):
        response = client.get('/api/contents')

        assert response.status_code == 200
        assert response.get_json() == sample_contents

    def test_corrupt_file_is_generic_failure(self, client, contents_file):
        contents_file.write_text('not json', encoding='utf-8')

        response = client.get('/api/contents')
        data = response.get_json()

        assert response.status_code == 500
        assert data['success'] is False
        assert data['error'] == 'Failed to read contents'

    def test_missing_file_is_generic_failure(self, client, contents_file):
        contents_file.unlink()

        response = client.get('/api/contents')
        assert response.status_code == 500
        assert response.get_json()['error'] == 'Failed to read contents'

    def test_non_conforming_elements_are_listed(self, client, contents_file, sample_contents):
        stored = list(sample_contents)
        stored[0] = dict(sample_contents[0], Duration=True)
        stored.append(None)
        contents_file.write_text(json.dumps(stored), encoding='utf-8')

        response = client.get('/api/contents')

        assert response.status_code == 200
        assert response.get_json() == stored


class TestCreateContent:
    """Tests for POST /api/contents"""

    def test_appends_record(self, client, read_contents, sample_contents):
        response = client.post('/api/contents', json=NEW_RECORD)
        data = response.get_json()

        assert response.status_code == 201
        assert data['success'] is True
        assert data['index'] == len(sample_contents)
        assert read_contents()[-1] == NEW_RECORD

    def test_rejects_non_object_body(self, client, read_contents, sample_contents):
        response = client.post('/api/contents', data='[1, 2]', content_type='application/json')

        assert response.status_code == 400
        assert read_contents() == sample_contents

    def test_storage_failure(self, client, contents_file):
        contents_file.write_text('{', encoding='utf-8')

        response = client.post('/api/contents', json=NEW_RECORD)
        assert response.status_code == 500
        assert response.get_json()['error'] == 'Failed to save content'


class TestUpdateContent:
    """Tests for PUT /api/contents"""

    def test_replaces_record(self, client, read_contents, sample_contents):
        response = client.put('/api/contents', json={'index': 2, 'data': NEW_RECORD})

        expected = list(sample_contents)
        expected[2] = NEW_RECORD
        assert response.status_code == 200
        assert response.get_json()['success'] is True
        assert read_contents() == expected

    def test_integral_float_index(self, client, read_contents, sample_contents):
        response = client.put('/api/contents', json={'index': 1.0, 'data': {'Post Title': 'x'}})

        expected = list(sample_contents)
        expected[1] = {'Post Title': 'x'}
        assert response.status_code == 200
        assert read_contents() == expected

    @pytest.mark.parametrize('index', ['2', 2.5, True, None])
    def test_non_numeric_index(self, client, read_contents, sample_contents, index):
        response = client.put('/api/contents', json={'index': index, 'data': NEW_RECORD})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid index'
        assert read_contents() == sample_contents

    @pytest.mark.parametrize('index', [-1, 5, 99])
    def test_out_of_range(self, client, read_contents, sample_contents, index):
        response = client.put('/api/contents', json={'index': index, 'data': NEW_RECORD})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Index out of range'
        assert read_contents() == sample_contents

    def test_data_must_be_object(self, client, read_contents, sample_contents):
        response = client.put('/api/contents', json={'index': 0, 'data': 'nope'})

        assert response.status_code == 400
        assert read_contents() == sample_contents

    def test_out_of_range_reported_before_invalid_data(self, client, read_contents, sample_contents):
        response = client.put('/api/contents', json={'index': len(sample_contents), 'data': 'nope'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Index out of range'
        assert read_contents() == sample_contents

    def test_storage_failure(self, client, contents_file):
        contents_file.write_text('[', encoding='utf-8')

        response = client.put('/api/contents', json={'index': 0, 'data': NEW_RECORD})
        assert response.status_code == 500
        assert response.get_json()['error'] == 'Failed to update content'


class TestDeleteContent:
    """Tests for DELETE /api/contents"""

    def test_removes_record(self, client, read_contents, sample_contents):
        response = client.delete('/api/contents', json={'index': 0})

        assert response.status_code == 200
        assert read_contents() == sample_contents[1:]

    def test_integral_float_index(self, client, read_contents, sample_contents):
        response = client.delete('/api/contents', json={'index': 2.0})

        assert response.status_code == 200
        assert read_contents() == sample_contents[:2] + sample_contents[3:]

    def test_non_numeric_index(self, client, read_contents, sample_contents):
        response = client.delete('/api/contents', json={'index': 'first'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid index'
        assert read_contents() == sample_contents

    def test_out_of_range(self, client, read_contents, sample_contents):
        response = client.delete('/api/contents', json={'index': len(sample_contents)})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Index out of range'
        assert read_contents() == sample_contents

    def test_storage_failure(self, client, contents_file):
        contents_file.write_text('', encoding='utf-8')

        response = client.delete('/api/contents', json={'index': 0})
        assert response.status_code == 500
        assert response.get_json()['error'] == 'Failed to delete content'


class TestProjectionEndpoints:
    """Tests for the read-only timeline and archive endpoints"""

    def test_upcoming(self, client):
        response = client.get('/api/contents/upcoming')
        data = response.get_json()

        assert response.status_code == 200
        assert data['total'] == 2
        assert [item['index'] for item in data['data']] == [1, 0]
        assert data['data'][0]['record']['Type'] == 'Primary'
        assert data['data'][0]['days_until'] == 3
        assert data['data'][0]['badge'] == 'URGENT'

    def test_upcoming_type_filter(self, client):
        data = client.get('/api/contents/upcoming?type=Short%20(portrait)').get_json()
        assert [item['index'] for item in data['data']] == [0]

    def test_archive_default_order(self, client):
        data = client.get('/api/contents/archive').get_json()
        assert [item['index'] for item in data['data']] == [3, 2]

    def test_archive_ascending(self, client):
        data = client.get('/api/contents/archive?order=asc').get_json()
        assert [item['index'] for item in data['data']] == [2, 3]

    def test_archive_search(self, client):
        data = client.get('/api/contents/archive?q=loper').get_json()
        assert [item['index'] for item in data['data']] == [2]
        assert data['data'][0]['days_until'] == -5


class TestHealthAndMetrics:
    def test_health(self, client, sample_contents):
        response = client.get('/api/health')
        data = json.loads(response.data)

        assert response.status_code == 200
        assert data['status'] == 'healthy'
        assert data['records'] == len(sample_contents)

    def test_health_reports_storage_failure(self, client, contents_file):
        contents_file.write_text('oops', encoding='utf-8')
        assert client.get('/api/health').status_code == 500

    def test_metrics_exposition(self, client):
        client.get('/api/contents')
        response = client.get('/api/metrics')

        assert response.status_code == 200
        assert b'ondocket_api_requests_total' in response.data
        assert b'ondocket_store_operations_total' in response.data
