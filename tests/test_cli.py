"""
Tests for the command-line front end, its config model and port parsing.
Run with: pytest tests/test_cli.py -v
"""
import json
import logging

import pytest

import portfinder.finder as finder_module
import portfinder.scanner as scanner_module
from portfinder.config import ScanConfig
from portfinder.errors import PortFinderError
from portfinder.main import build_parser, main
from portfinder.probe import DEFAULT_TIMEOUT
from portfinder.scanner import DEFAULT_CONCURRENCY
from portfinder.utils import parse_ports


@pytest.fixture
def busy(monkeypatch):
    """Fake probes for both the scanners and --check."""
    taken = set()

    async def probe(port, host, timeout):
        return port not in taken

    monkeypatch.setattr(scanner_module, "check_port", probe)
    monkeypatch.setattr(finder_module, "check_port", probe)
    return taken


@pytest.fixture
def package_logger():
    """Restores the portfinder logger after main() reconfigures it."""
    logger = logging.getLogger("portfinder")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


class TestPortParser:
    """Test exclusion list parsing"""

    def test_parse_single_port(self):
        """Test single port"""
        assert parse_ports("80") == [80]

    def test_parse_mixed(self):
        """Test commas, spaces and ranges together"""
        assert parse_ports("3000,3001 4000-4002") == [3000, 3001, 4000, 4001, 4002]

    def test_parse_empty(self):
        """Empty input means no exclusions"""
        assert parse_ports("") == []

    def test_parse_dedupes(self):
        """Overlapping entries collapse"""
        assert parse_ports("5,5,4-6") == [4, 5, 6]

    @pytest.mark.parametrize("text", ["abc", "80,x", "70000", "0", "-5", "10-", "9-3", "1-2-3"])
    def test_parse_invalid_raises(self, text):
        """Malformed entries are an error, not silently dropped"""
        with pytest.raises(PortFinderError) as exc:
            parse_ports(text)
        assert exc.value.code in (PortFinderError.INVALID_PORT, PortFinderError.INVALID_RANGE)


class TestScanConfig:
    """Test Pydantic configuration validation"""

    def test_defaults(self):
        """Defaults match the documented ones"""
        config = ScanConfig()
        assert config.host == "0.0.0.0"
        assert (config.start, config.end) == (3000, 65535)
        assert config.count == 1
        assert config.concurrency == 100
        assert config.timeout == 1.0

    def test_cleans_lists(self):
        """Exclusions are sorted and validator names trimmed"""
        config = ScanConfig(exclude=[5, 3, 5], validators=[" privileged", "", "common-ports "])
        assert config.exclude == [3, 5]
        assert config.validators == ["privileged", "common-ports"]

    def test_invalid_timeout(self):
        """Test timeout validation"""
        with pytest.raises(Exception):  # Pydantic ValidationError
            ScanConfig(timeout=-1.0)

    def test_invalid_concurrency(self):
        """Test concurrency validation"""
        with pytest.raises(Exception):
            ScanConfig(concurrency=10000)

    def test_invalid_count(self):
        """Count must be at least one"""
        with pytest.raises(Exception):
            ScanConfig(count=0)

    def test_blank_host(self):
        """Blank hosts are rejected"""
        with pytest.raises(Exception):
            ScanConfig(host="   ")


class TestParser:
    """Test argument parsing"""

    def test_short_flags(self):
        """Short flags map onto the long names"""
        args = build_parser().parse_args(["-s", "8000", "-e", "8100", "-x", "8001,8002", "-H", "127.0.0.1",
                                          "-c", "3", "-v", "common-ports,privileged", "-j"])
        assert args.start == 8000
        assert args.end == 8100
        assert args.exclude == "8001,8002"
        assert args.host == "127.0.0.1"
        assert args.count == 3
        assert args.validators == ["common-ports", "privileged"]
        assert args.json

    def test_defaults_follow_library(self):
        """Unset flags fall back to the library defaults"""
        args = build_parser().parse_args([])
        assert args.concurrency == DEFAULT_CONCURRENCY
        assert args.timeout == DEFAULT_TIMEOUT
        assert args.host == "0.0.0.0"

    def test_help_exits(self, capsys):
        """--help prints usage and exits 0"""
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "--consecutive" in capsys.readouterr().out


class TestMain:
    """Test end-to-end CLI runs with a fake probe"""

    def test_single_port(self, busy, capsys):
        """Prints the first free port"""
        busy.add(5000)
        assert main(["--start", "5000", "--end", "5010"]) == 0
        assert capsys.readouterr().out.strip() == "5001"

    def test_single_port_json(self, busy, capsys):
        """JSON output for one port"""
        assert main(["-s", "5000", "-e", "5010", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"port": 5000}

    def test_many_ports(self, busy, capsys):
        """Several ports are printed space separated"""
        assert main(["-s", "5000", "-e", "5010", "-c", "3", "-x", "5001"]) == 0
        assert capsys.readouterr().out.strip() == "5000 5002 5003"

    def test_consecutive_json(self, busy, capsys):
        """Consecutive block in JSON"""
        busy.update({8000, 8001, 8002})
        assert main(["-s", "8000", "-e", "8010", "-c", "3", "--consecutive", "-j"]) == 0
        assert json.loads(capsys.readouterr().out) == {"ports": [8003, 8004, 8005]}

    def test_check_available(self, busy, capsys):
        """--check reports availability and exits 0"""
        assert main(["--check", "3000"]) == 0
        assert capsys.readouterr().out.strip() == "Port 3000 is available"

    def test_check_in_use(self, busy, capsys):
        """--check on a busy port exits 1"""
        busy.add(3000)
        assert main(["--check", "3000", "--json"]) == 1
        assert json.loads(capsys.readouterr().out) == {"port": 3000, "available": False}

    def test_check_invalid_port(self, busy, capsys):
        """--check validates the port"""
        assert main(["--check", "70000"]) == 1
        assert "Port must be an integer between 1 and 65535" in capsys.readouterr().err

    def test_invalid_range(self, busy, capsys):
        """Errors go to stderr with exit code 1"""
        assert main(["--start", "5000", "--end", "4000"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == "Error: Start port must be less than or equal to end port"

    def test_invalid_range_json(self, busy, capsys):
        """JSON errors carry code and details"""
        assert main(["--start", "5000", "--end", "4000", "--json"]) == 1
        error = json.loads(capsys.readouterr().err)["error"]
        assert error["code"] == "INVALID_RANGE"
        assert error["details"] == {"start": 5000, "end": 4000}

    def test_unknown_validator(self, busy, capsys):
        """Unknown validators abort the run"""
        assert main(["--validators", "nope"]) == 1
        assert "Unknown validator: nope" in capsys.readouterr().err

    def test_bad_exclude(self, busy, capsys):
        """Malformed exclusion lists are reported"""
        assert main(["-x", "80,abc", "--json"]) == 1
        assert json.loads(capsys.readouterr().err)["error"]["code"] == "INVALID_PORT"

    def test_bad_concurrency(self, busy, capsys):
        """Config validation errors are reported as INVALID_CONFIG"""
        assert main(["--concurrency", "0", "--json"]) == 1
        error = json.loads(capsys.readouterr().err)["error"]
        assert error["code"] == "INVALID_CONFIG"
        assert error["details"] == {"field": "concurrency"}

    def test_insufficient(self, busy, capsys):
        """Short results become an error"""
        busy.update({5000, 5002})
        assert main(["-s", "5000", "-e", "5003", "-c", "3", "-j"]) == 1
        error = json.loads(capsys.readouterr().err)["error"]
        assert error["code"] == "INSUFFICIENT_PORTS"
        assert error["details"] == {"requested": 3, "found": 2, "ports": [5001, 5003]}

    def test_verbose_logs_scan(self, busy, capsys, caplog, package_logger):
        """--verbose turns on the library's debug logs"""
        assert main(["-s", "5000", "-e", "5010", "--verbose"]) == 0
        assert "Parallel scan 5000-5010" in caplog.text
        assert capsys.readouterr().out.strip() == "5000"
        assert package_logger.level == logging.DEBUG
