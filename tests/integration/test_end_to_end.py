"""
End-to-End Integration Tests

Tests the complete review flow through the Flask app, from the PR link to
the stored report, with GitHub and the model endpoint mocked at the HTTP
session level.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock

from pr_review_server.api import PRReviewAPI
from pr_review_server.github.client import GitHubClient
from pr_review_server.llm.client import ModelClient
from pr_review_server.server import create_app


REVIEW_TEXT = """# Code Review: Fix off-by-one PR#42

## Positive Feedback
1. The loop bound is now correct.
"""


class TestEndToEndFlow:
    """Test complete end-to-end review generation flow."""

    @pytest.fixture(autouse=True)
    def setup(self, app_config, make_response, pr_payload, files_payload):
        """Set up mocked sessions and the Flask test client."""
        self.config = app_config
        self.make_response = make_response
        self.reviews_dir = Path(app_config.report.output_dir)

        self.github_session = Mock()
        self.github_routes = {
            'https://api.github.com/repos/acme/widgets/pulls/42': make_response(200, pr_payload),
            'https://api.github.com/repos/acme/widgets/pulls/42/files': make_response(200, files_payload),
        }
        self.github_session.request.side_effect = self._github_request

        self.model_session = Mock()
        self.model_session.post.return_value = make_response(
            200, {'choices': [{'message': {'content': REVIEW_TEXT}}]}
        )

        api = PRReviewAPI(
            app_config,
            github_client=GitHubClient('ghp_test_token', session=self.github_session),
            model_client=ModelClient.from_config(
                app_config.model,
                referer=app_config.server.base_url,
                session=self.model_session,
            ),
        )
        self.client = create_app(app_config, reviewer_api=api).test_client()

    def _github_request(self, method, url, **kwargs):
        if url in self.github_routes:
            return self.github_routes[url]
        return self.make_response(404, {'message': 'Not Found'})

    def _stored_files(self):
        if not self.reviews_dir.exists():
            return []
        return sorted(p.name for p in self.reviews_dir.iterdir())

    def test_successful_review(self):
        """Scenario A: a valid PR produces a stored report and success payload."""
        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'success'
        assert data['pull_request_url'] == 'https://github.com/acme/widgets/pull/42'
        assert 'Fix off-by-one' in data['ai_review_markdown']
        assert REVIEW_TEXT in data['ai_review_markdown']

        html_path = Path(data['output_files']['html'])
        md_path = Path(data['output_files']['markdown'])
        assert html_path.exists() and md_path.exists()
        assert html_path.stem == md_path.stem
        assert html_path.stem.startswith('pr-review-acme-widgets-42-')
        assert data['ai_review_html_url'] == f"http://localhost:3000/reviews/{html_path.name}"
        assert md_path.read_text(encoding='utf-8') == data['ai_review_markdown']
        assert len(self._stored_files()) == 2

    def test_prompt_sent_to_model(self):
        """The model receives the rubric, PR metadata and the aggregated diff."""
        self.client.post('/review-pull-request', json={'prLink': 'https://github.com/acme/widgets/pull/42'})

        body = self.model_session.post.call_args.kwargs['json']
        assert body['model'] == 'test/model'
        assert body['temperature'] == 0.7
        assert body['max_tokens'] == 3500
        system, user = body['messages']
        assert system['role'] == 'system'
        assert '**Pull Request Title:** Fix off-by-one' in user['content']
        assert '--- File: src/loop.py (Status: modified) ---' in user['content']
        assert 'assets/logo.png' not in user['content']

    def test_stored_report_is_served(self):
        """Stored HTML and Markdown are available under /reviews/."""
        data = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        ).get_json()

        html_name = Path(data['output_files']['html']).name
        md_name = Path(data['output_files']['markdown']).name

        html_response = self.client.get(f'/reviews/{html_name}')
        assert html_response.status_code == 200
        assert b'<title>Code Review: Fix off-by-one #42</title>' in html_response.data

        md_response = self.client.get(f'/reviews/{md_name}')
        assert md_response.status_code == 200
        assert md_response.data.decode('utf-8') == data['ai_review_markdown']

    def test_unknown_report_file(self):
        response = self.client.get('/reviews/does-not-exist.html')

        assert response.status_code == 404
        assert 'error' in response.get_json()

    def test_pull_request_not_found(self):
        """Scenario B: GitHub 404 maps to 404 and nothing is written."""
        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/999'}
        )

        assert response.status_code == 404
        assert 'not found' in response.get_json()['error']
        assert self._stored_files() == []
        self.model_session.post.assert_not_called()

    def test_github_forbidden(self):
        self.github_routes['https://api.github.com/repos/acme/widgets/pulls/42'] = self.make_response(
            403, {'message': 'Resource not accessible by integration'}
        )

        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        )

        assert response.status_code == 403
        assert 'GITHUB_TOKEN' in response.get_json()['error']
        assert self._stored_files() == []

    def test_github_server_error(self):
        self.github_routes['https://api.github.com/repos/acme/widgets/pulls/42/files'] = self.make_response(
            502, {'message': 'Server Error'}
        )

        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        )

        assert response.status_code == 500
        assert self._stored_files() == []

    def test_model_failure(self):
        """Scenario C: a non-2xx model response maps to 500 and nothing is written."""
        upstream_error = {'error': {'message': 'Rate limit exceeded', 'code': 429}}
        self.model_session.post.return_value = self.make_response(429, upstream_error)

        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        )

        assert response.status_code == 500
        data = response.get_json()
        assert 'Failed to get review from AI' in data['error']
        assert data['details'] == upstream_error
        assert self._stored_files() == []

    @pytest.mark.parametrize('payload', [
        {},
        {'prLink': ''},
        {'prLink': 'https://github.com/acme/widgets'},
        {'prLink': 'https://github.com/acme/widgets/pull/abc'},
        {'prLink': ['https://github.com/acme/widgets/pull/42']},
    ])
    def test_invalid_input_makes_no_network_call(self, payload):
        response = self.client.post('/review-pull-request', json=payload)

        assert response.status_code == 400
        assert 'error' in response.get_json()
        self.github_session.request.assert_not_called()
        self.model_session.post.assert_not_called()

    def test_non_json_body(self):
        response = self.client.post('/review-pull-request', data='prLink=x', content_type='text/plain')

        assert response.status_code == 400

    def test_unexpected_error_is_json_500(self):
        self.github_session.request.side_effect = RuntimeError("boom")

        response = self.client.post(
            '/review-pull-request',
            json={'prLink': 'https://github.com/acme/widgets/pull/42'}
        )

        assert response.status_code == 500
        assert 'boom' in response.get_json()['error']

    def test_health(self):
        response = self.client.get('/health')

        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'
