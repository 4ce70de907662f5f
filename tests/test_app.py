"""
Tests for the Flask application core functionality.
Tests app startup, the listing and detail routes, and the health check.
"""

import unittest

from movielibrary.app import app
from movielibrary.session_manager import reset_session_manager


class TestFlaskAppStartup(unittest.TestCase):
    """Test Flask application startup and configuration."""

    def test_app_is_flask_instance(self):
        from flask import Flask
        self.assertIsInstance(app, Flask)

    def test_app_name(self):
        self.assertEqual(app.name, 'movielibrary.app')

    def test_api_blueprint_registered(self):
        self.assertIn('api', app.blueprints)


class AppTestCase(unittest.TestCase):
    """Base class giving each test a fresh client and session registry."""

    def setUp(self):
        reset_session_manager()
        app.config['TESTING'] = True
        app.config['SECRET_KEY'] = 'test-secret-key'
        self.client = app.test_client()

    def tearDown(self):
        reset_session_manager()


class TestHealthEndpoint(AppTestCase):
    """Test the health check endpoint."""

    def test_health_endpoint(self):
        response = self.client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content_type, 'application/json')
        self.assertEqual(response.get_json(), {"status": "healthy", "service": "movielibrary"})

    def test_request_id_header(self):
        response = self.client.get('/health')
        self.assertTrue(response.headers.get('X-Request-ID'))


class TestIndexRoute(AppTestCase):
    """Test the default listing route."""

    def test_index_lists_seed_movies(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)

        data = response.get_json()
        self.assertEqual([m['title'] for m in data['movies']], ['Inception', 'Interstellar'])
        self.assertEqual(data['count'], 2)
        self.assertEqual(data['total'], 2)
        self.assertEqual(data['criteria'], {'titleSubstring': '', 'minRating': 0})
        self.assertEqual(data['draft']['title'], '')

    def test_index_cards_include_stars(self):
        data = self.client.get('/').get_json()
        self.assertEqual(data['movies'][1]['stars'], [True, True, True, True, False])

    def test_index_applies_filter(self):
        self.client.put('/api/filter', json={'titleSubstring': 'inter'})
        data = self.client.get('/').get_json()

        self.assertEqual([m['title'] for m in data['movies']], ['Interstellar'])
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['total'], 2)

    def test_index_min_rating(self):
        self.client.put('/api/filter', json={'titleSubstring': '', 'minRating': 5})
        data = self.client.get('/').get_json()
        self.assertEqual([m['title'] for m in data['movies']], ['Inception'])

    def test_session_cookie_keeps_catalog(self):
        self.client.patch('/api/draft', json={'title': 'Memento', 'posterURL': 'p'})
        self.client.post('/api/draft/submit')

        data = self.client.get('/').get_json()
        self.assertEqual(data['total'], 3)

        other = app.test_client()
        self.assertEqual(other.get('/').get_json()['total'], 2)


class TestMovieDetailRoute(AppTestCase):
    """Test the title-addressed detail route."""

    def test_detail_found(self):
        response = self.client.get('/movies/Interstellar')
        self.assertEqual(response.status_code, 200)

        movie = response.get_json()['movie']
        self.assertEqual(movie['title'], 'Interstellar')
        self.assertEqual(movie['rating'], 4)
        self.assertEqual(movie['description'], 'A space epic about love and time.')

    def test_detail_not_found(self):
        response = self.client.get('/movies/Nope')
        self.assertEqual(response.status_code, 404)

        data = response.get_json()
        self.assertEqual(data['status'], 'not_found')
        self.assertEqual(data['title'], 'Nope')

    def test_detail_is_case_sensitive(self):
        response = self.client.get('/movies/interstellar')
        self.assertEqual(response.status_code, 404)

    def test_detail_url_encoded_title(self):
        self.client.patch('/api/draft', json={'title': 'The Good, the Bad and the Ugly', 'posterURL': 'p'})
        self.client.post('/api/draft/submit')

        response = self.client.get('/movies/The%20Good,%20the%20Bad%20and%20the%20Ugly')
        self.assertEqual(response.status_code, 200)

    def test_detail_title_with_slash(self):
        self.client.patch('/api/draft', json={'title': 'Face/Off', 'posterURL': 'p'})
        self.client.post('/api/draft/submit')

        response = self.client.get('/movies/Face/Off')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['movie']['title'], 'Face/Off')


if __name__ == '__main__':
    unittest.main()
