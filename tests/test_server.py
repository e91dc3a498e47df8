"""Tests for FastAPI server module"""
from unittest.mock import patch
import pytest
from fastapi.testclient import TestClient
import httpx

from app.server import MetricsServer
from config import Config
from metrics import descriptors as d
from metrics.models import MetricValue
from metrics.registry import MetricsRegistry


SAMPLE_METRICS = [
    MetricValue(d.POWERMETRICS_CPU_POWER, 1339),
    MetricValue(d.VMSTAT_PAGE_SIZE, 16384),
]


class TestMetricsServer:
    """Test FastAPI server functionality"""

    def setup_method(self):
        """Setup test fixtures"""
        self.config = Config()
        self.server = MetricsServer(self.config, MetricsRegistry(self.config, []))
        self.client = TestClient(self.server.get_app())

    def test_metrics_endpoint(self):
        """Test metrics endpoint renders a fresh collection"""
        with patch.object(self.server.registry, 'collect_with_errors', return_value=(SAMPLE_METRICS, 0)) as mock_collect:
            response = self.client.get("/metrics")

            assert response.status_code == 200
            assert response.headers["content-type"] == "text/plain; version=0.0.4; charset=utf-8"
            assert response.text == (
                "# HELP powermetrics_cpu_power_milliwatts Current CPU power in milliwatts.\n"
                "# TYPE powermetrics_cpu_power_milliwatts gauge\n"
                "powermetrics_cpu_power_milliwatts 1339\n"
                "# HELP vmstat_page_size_bytes Size of pages in bytes.\n"
                "# TYPE vmstat_page_size_bytes gauge\n"
                "vmstat_page_size_bytes 16384\n"
            )
            mock_collect.assert_called_once()

    def test_each_scrape_collects_again(self):
        with patch.object(self.server.registry, 'collect_with_errors', return_value=(SAMPLE_METRICS, 0)) as mock_collect:
            self.client.get("/metrics")
            self.client.get("/metrics")

            assert mock_collect.call_count == 2
            assert self.server.scrape_count == 2
            assert self.server.last_metrics_count == 2

    @patch('app.server.log_metrics_collection')
    def test_scrape_reports_failed_collectors(self, mock_log):
        with patch.object(self.server.registry, 'collect_with_errors', return_value=(SAMPLE_METRICS, 1)):
            self.client.get("/metrics")

        assert mock_log.call_args[0][3] == 1
        data = self.client.get("/health").json()
        assert data["last_scrape_errors"] == 1

    def test_metrics_endpoint_with_nothing_collected(self):
        response = self.client.get("/metrics")

        assert response.status_code == 200
        assert response.text == ""

    def test_health_endpoint(self):
        """Test health endpoint"""
        self.server.scrape_count = 10
        self.server.last_metrics_count = 38

        response = self.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["total_scrapes"] == 10
        assert data["last_metrics_count"] == 38
        assert data["enabled_collectors"] == ["powermetrics", "vmstat"]

    def test_collectors_endpoint(self):
        """Test collectors endpoint"""
        mock_status = {
            "vmstat": {"enabled": True, "help": "Virtual memory page statistics from vm_stat"},
        }

        with patch.object(self.server.registry, 'get_collector_status', return_value=mock_status):
            response = self.client.get("/collectors")

            assert response.status_code == 200
            data = response.json()
            assert data["collectors"] == mock_status
            assert "enabled_collectors" in data

    def test_request_logging_header(self):
        response = self.client.get("/health")

        assert "x-process-time" in response.headers

    def test_request_logging_disabled(self):
        config = Config(enable_request_logging=False)
        server = MetricsServer(config, MetricsRegistry(config, []))

        response = TestClient(server.get_app()).get("/health")

        assert "x-process-time" not in response.headers

    def test_unknown_path(self):
        assert self.client.get("/nope").status_code == 404

    @pytest.mark.asyncio
    async def test_metrics_endpoint_async_client(self):
        """Test metrics endpoint through an ASGI transport"""
        with patch.object(self.server.registry, 'collect_with_errors', return_value=(SAMPLE_METRICS, 0)):
            transport = httpx.ASGITransport(app=self.server.get_app())
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/metrics")

                assert response.status_code == 200
                assert "vmstat_page_size_bytes 16384" in response.text


class TestCreateServer:
    """Test the entry point's server factory"""

    @patch('main.platform.system', return_value="Linux")
    def test_create_server_off_macos(self, mock_system):
        from main import create_server

        server = create_server(Config())

        assert server.registry.list_collectors() == ["powermetrics", "vmstat", "macmon"]
        server.registry.cleanup()
