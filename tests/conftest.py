"""
Pytest fixtures and configuration for On The Docket tests
"""
import json
from datetime import date, timedelta

import pytest

from ondocket.app import create_app
from ondocket.store import JsonFileStorage, RecordStore


def days_from_today(days):
    return (date.today() + timedelta(days=days)).isoformat()


@pytest.fixture(scope='session')
def app_config():
    """Base app configuration for tests"""
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key'
    }


@pytest.fixture
def sample_contents():
    """Collection with upcoming, same-day, published and far-future entries"""
    return [
        {
            'File Name': 'argument_recap.mp4',
            'Post Title': 'Oral argument recap',
            'Description': 'What the justices asked about presidential immunity.',
            'Publication Date': days_from_today(3),
            'Duration': '12:40',
            'YouTube': 'https://youtube.com/watch?v=recap',
            'TikTok': '',
            'X.com': '',
            'Type': 'Short (portrait)',
            'Case': 'Trump v. United States',
            'SCOTUS Docket no.': '23-939'
        },
        {
            'File Name': 'immunity_primary.mp4',
            'Post Title': 'Immunity explained',
            'Description': 'Full episode on the immunity question.',
            'Publication Date': days_from_today(3),
            'Duration': '24:05',
            'YouTube': 'https://youtube.com/watch?v=primary',
            'TikTok': 'https://tiktok.com/@docket/video/1',
            'X.com': 'https://x.com/docket/status/1',
            'Type': 'Primary',
            'Case': 'Trump v. United States',
            'SCOTUS Docket no.': '23-939'
        },
        {
            'File Name': 'chevron.mp4',
            'Post Title': 'Chevron is gone',
            'Description': 'Breaking down the end of agency deference.',
            'Publication Date': days_from_today(-5),
            'Duration': '18:00',
            'YouTube': 'https://youtube.com/watch?v=chevron',
            'TikTok': None,
            'X.com': None,
            'Type': 'Primary',
            'Case': 'Loper Bright Enterprises v. Raimondo',
            'SCOTUS Docket no.': '22-451'
        },
        {
            'File Name': 'same_day.mp4',
            'Post Title': 'Same day short',
            'Description': 'Goes out today.',
            'Publication Date': days_from_today(0),
            'Duration': '0:58',
            'YouTube': None,
            'TikTok': 'https://tiktok.com/@docket/video/2',
            'X.com': None,
            'Type': 'Short (landscape)',
            'Case': 'Moyle v. United States',
            'SCOTUS Docket no.': '23-726'
        },
        {
            'File Name': 'far_future.mp4',
            'Post Title': 'Next term preview',
            'Description': 'Cases to watch next term.',
            'Publication Date': days_from_today(30),
            'Duration': '30:00',
            'YouTube': None,
            'TikTok': None,
            'X.com': None,
            'Type': 'Primary',
            'Case': None,
            'SCOTUS Docket no.': None
        }
    ]


@pytest.fixture
def contents_file(tmp_path, sample_contents):
    """Contents file seeded with the sample collection"""
    path = tmp_path / 'data' / 'contents.json'
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(sample_contents, indent=2), encoding='utf-8')
    return path


@pytest.fixture
def read_contents(contents_file):
    """Return a callable reading the contents file as stored on disk"""
    def _read():
        return json.loads(contents_file.read_text(encoding='utf-8'))
    return _read


@pytest.fixture
def store(contents_file):
    return RecordStore(JsonFileStorage(str(contents_file)))


@pytest.fixture
def app(tmp_path, app_config, contents_file):
    config = dict(app_config)
    config['CONFIG_FILE'] = str(tmp_path / 'config' / 'settings.yaml')
    config['CONTENTS_FILE'] = str(contents_file)
    return create_app(config)


@pytest.fixture
def client(app):
    """Provide a Flask test client for the application."""
    with app.test_client() as client:
        with app.app_context():
            yield client
