"""
Tests for Prometheus Metrics
"""

import unittest

from movielibrary.app import app
from movielibrary.metrics import (
    movies_added_total,
    movie_append_rejected_total,
    catalog_lookups_total,
    filter_updates_total,
    http_requests_total,
    active_sessions,
    track_movie_added,
    track_append_rejected,
    track_lookup,
    track_filter_update,
    track_http_request,
    update_active_sessions,
    get_metrics,
)
from movielibrary.session_manager import reset_session_manager


class TestMetricsCollection(unittest.TestCase):
    """Test metrics collection functions."""

    def test_track_movie_added(self):
        initial = movies_added_total._value.get()
        track_movie_added()
        self.assertEqual(movies_added_total._value.get(), initial + 1)

    def test_track_append_rejected_per_field(self):
        title = movie_append_rejected_total.labels(field='title')
        poster = movie_append_rejected_total.labels(field='posterURL')
        initial_title, initial_poster = title._value.get(), poster._value.get()

        track_append_rejected(['title', 'posterURL'])

        self.assertEqual(title._value.get(), initial_title + 1)
        self.assertEqual(poster._value.get(), initial_poster + 1)

    def test_track_lookup(self):
        hits = catalog_lookups_total.labels(result='hit')
        misses = catalog_lookups_total.labels(result='miss')
        initial_hits, initial_misses = hits._value.get(), misses._value.get()

        track_lookup(True)
        track_lookup(False)
        track_lookup(False)

        self.assertEqual(hits._value.get(), initial_hits + 1)
        self.assertEqual(misses._value.get(), initial_misses + 2)

    def test_track_filter_update(self):
        initial = filter_updates_total._value.get()
        track_filter_update()
        self.assertEqual(filter_updates_total._value.get(), initial + 1)

    def test_track_http_request(self):
        counter = http_requests_total.labels(method='GET', endpoint='/test', status=200)
        initial = counter._value.get()
        track_http_request('GET', '/test', 200, 0.01)
        self.assertEqual(counter._value.get(), initial + 1)

    def test_update_active_sessions(self):
        update_active_sessions(7)
        self.assertEqual(active_sessions._value.get(), 7)

    def test_get_metrics(self):
        text, content_type = get_metrics()
        self.assertIn(b'movielibrary_movies_added_total', text)
        self.assertIn('text/plain', content_type)


class TestMetricsFromRequests(unittest.TestCase):
    """Metrics move when the routes are exercised."""

    def setUp(self):
        reset_session_manager()
        app.config['TESTING'] = True
        self.client = app.test_client()

    def tearDown(self):
        reset_session_manager()

    def test_submit_counts(self):
        added = movies_added_total._value.get()
        rejected = movie_append_rejected_total.labels(field='posterURL')._value.get()

        self.client.patch('/api/draft', json={'title': 'Memento'})
        self.client.post('/api/draft/submit')
        self.client.patch('/api/draft', json={'posterURL': 'p'})
        self.client.post('/api/draft/submit')

        self.assertEqual(movies_added_total._value.get(), added + 1)
        self.assertEqual(
            movie_append_rejected_total.labels(field='posterURL')._value.get(),
            rejected + 1
        )

    def test_detail_lookup_counts(self):
        hits = catalog_lookups_total.labels(result='hit')._value.get()
        self.client.get('/movies/Inception')
        self.assertEqual(catalog_lookups_total.labels(result='hit')._value.get(), hits + 1)


if __name__ == '__main__':
    unittest.main()
