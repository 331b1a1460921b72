"""Tests for health check endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from langfuse_operator.health import create_combined_wsgi_app, start_metrics_server


def _environ(path: str) -> dict:
    return {
        "REQUEST_METHOD": "GET",
        "PATH_INFO": path,
        "SERVER_NAME": "localhost",
        "SERVER_PORT": "8080",
        "wsgi.url_scheme": "http",
    }


class TestCombinedWsgiApp:
    """Test cases for combined WSGI application."""

    def test_combined_app_healthz(self):
        """Test combined app handles /healthz."""
        app = create_combined_wsgi_app()
        start_response = MagicMock()

        result = app(_environ("/healthz"), start_response)

        assert b'"status":"ok"' in b"".join(result)
        assert "200" in start_response.call_args[0][0]

    def test_combined_app_readyz(self):
        """Test combined app handles /readyz."""
        app = create_combined_wsgi_app()

        result = app(_environ("/readyz"), MagicMock())

        assert b'"status":"ready"' in b"".join(result)

    def test_content_type_is_json(self):
        """Test health responses are JSON."""
        app = create_combined_wsgi_app()
        start_response = MagicMock()

        app(_environ("/healthz"), start_response)

        headers = dict(start_response.call_args[0][1])
        assert headers["Content-Type"].startswith("application/json")

    @patch("langfuse_operator.health.make_wsgi_app")
    def test_combined_app_delegates_to_metrics(self, mock_make_wsgi):
        """Test combined app delegates /metrics to prometheus."""
        mock_metrics_app = MagicMock(return_value=[b"metrics data"])
        mock_make_wsgi.return_value = mock_metrics_app

        app = create_combined_wsgi_app()
        result = app(_environ("/metrics"), MagicMock())

        assert mock_metrics_app.called
        assert result == [b"metrics data"]


class TestStartMetricsServer:
    """Tests for the metrics server thread."""

    @patch("langfuse_operator.health.make_server")
    @patch("langfuse_operator.health.threading.Thread")
    def test_starts_server(self, mock_thread, mock_make_server):
        """Test that the server is created and its thread started."""
        mock_thread_instance = MagicMock()
        mock_thread.return_value = mock_thread_instance

        start_metrics_server(9090)

        mock_make_server.assert_called_once()
        assert mock_make_server.call_args[0][1] == 9090
        mock_thread_instance.start.assert_called_once()

    @patch("langfuse_operator.health.make_server")
    @patch("langfuse_operator.health.threading.Thread")
    def test_runs_as_daemon(self, mock_thread, mock_make_server):
        """Test that the server thread is created as daemon."""
        start_metrics_server(8080)

        assert mock_thread.call_args[1].get("daemon") is True
