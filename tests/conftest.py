"""
Shared test fixtures.
"""

import json
from typing import Any, Optional

import pytest
import requests

from pr_review_server.config import AppConfig, GitHubConfig, ModelConfig, ReportConfig, ServerConfig
from pr_review_server.models.pr_content import ChangedFile, PullRequestContent


def build_response(status_code: int, json_data: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response without network access."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = 'utf-8'
    if json_data is not None:
        response._content = json.dumps(json_data).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    elif text is not None:
        response._content = text.encode('utf-8')
    else:
        response._content = b''
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def pr_payload():
    """GitHub 'get a pull request' payload."""
    return {
        'number': 42,
        'title': 'Fix off-by-one',
        'html_url': 'https://github.com/acme/widgets/pull/42',
        'user': {'login': 'octocat'},
        'created_at': '2026-10-01T12:00:00Z',
        'updated_at': '2026-10-02T08:30:00Z',
        'base': {'ref': 'main', 'repo': {'full_name': 'acme/widgets'}},
        'head': {'ref': 'fix/off-by-one'},
        'body': 'Loop bound was inclusive.',
    }


@pytest.fixture
def files_payload():
    """GitHub 'list pull request files' payload."""
    return [
        {
            'filename': 'src/loop.py',
            'status': 'modified',
            'additions': 1,
            'deletions': 1,
            'patch': '@@ -1,3 +1,3 @@\n def count(n):\n-    return range(n + 1)\n+    return range(n)',
        },
        {
            'filename': 'assets/logo.png',
            'status': 'added',
            'additions': 0,
            'deletions': 0,
        },
    ]


@pytest.fixture
def pr_content():
    return PullRequestContent(
        number=42,
        title='Fix off-by-one',
        url='https://github.com/acme/widgets/pull/42',
        author='octocat',
        created_at='2026-10-01T12:00:00Z',
        updated_at='2026-10-02T08:30:00Z',
        base_ref='main',
        head_ref='fix/off-by-one',
        body='Loop bound was inclusive.',
        files=(
            ChangedFile('src/loop.py', 'modified', 1, 1, '@@ -1 +1 @@\n-a\n+b'),
            ChangedFile('assets/logo.png', 'added'),
        ),
    )


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        github=GitHubConfig(token='ghp_test_token'),
        model=ModelConfig(provider='openrouter', model='test/model', api_key='sk-test'),
        server=ServerConfig(port=3000),
        report=ReportConfig(output_dir=str(tmp_path / 'reviews'), language='en'),
    )
