"""Unit tests for package backend selection and enumeration."""

import pytest

from probe.collectors.packages import (
    QUERY_COMMANDS,
    PackageCollector,
    parse_package_output,
    select_backend,
)
from probe.core.errors import PackageQueryError
from probe.core.models import PackageBackendKind, PackageRecord
from tests.conftest import FakeCommandRunner


class TestSelectBackend:
    """Tests for select_backend function."""

    @pytest.mark.parametrize("os_id", ["rhel", "RHEL", "Rhel", "centos", "fedora", "Fedora-Asahi"])
    def test_rpm_family(self, os_id: str) -> None:
        """Test rhel-family identifiers select RPM, case-insensitively."""
        assert select_backend(os_id) is PackageBackendKind.RPM

    @pytest.mark.parametrize("os_id", ["ubuntu", "debian", "raspbian", "arch", "rocky", "", "opensuse-leap"])
    def test_everything_else_defaults_to_debian(self, os_id: str) -> None:
        """Test unrecognized identifiers silently select Debian."""
        assert select_backend(os_id) is PackageBackendKind.DEBIAN

    def test_none_is_debian(self) -> None:
        """Test a missing identifier still yields a backend."""
        assert select_backend(None) is PackageBackendKind.DEBIAN  # type: ignore[arg-type]

    def test_deterministic(self) -> None:
        """Test the same input always yields the same kind."""
        assert {select_backend("CentOS") for _ in range(5)} == {PackageBackendKind.RPM}

    def test_custom_tokens(self) -> None:
        """Test the RPM token list can be extended."""
        assert select_backend("rocky", ("rhel", "rocky")) is PackageBackendKind.RPM
        assert select_backend("fedora", ("rhel",)) is PackageBackendKind.DEBIAN


class TestParsePackageOutput:
    """Tests for parse_package_output function."""

    def test_three_fields(self) -> None:
        """Test a full line yields name, version and declared paths."""
        packages = parse_package_output("foo\t1.0\t/etc/foo.conf /etc/foo2.conf\n")
        assert packages == [
            PackageRecord(name="foo", version="1.0", config_files=("/etc/foo.conf", "/etc/foo2.conf"))
        ]

    def test_single_field_dropped(self) -> None:
        """Test a line with one field does not produce a record."""
        assert parse_package_output("bar\n") == []

    def test_two_fields_no_paths(self) -> None:
        """Test a missing third field means zero declared paths."""
        packages = parse_package_output("bash\t5.1\n")
        assert packages == [PackageRecord(name="bash", version="5.1")]
        assert packages[0].config_files == ()

    def test_empty_third_field(self) -> None:
        """Test an empty third field is kept as one empty path."""
        assert parse_package_output("libc6\t2.35\t\n")[0].config_files == ("",)

    def test_empty_lines_skipped_and_order_kept(self) -> None:
        """Test blank lines are ignored and output order preserved."""
        output = "\na\t1\n\nbar\nb\t2\t/etc/b\n\n"
        packages = parse_package_output(output)
        assert [package.name for package in packages] == ["a", "b"]
        assert packages[1].config_files == ("/etc/b",)

    def test_every_single_space_splits(self) -> None:
        """Test each space separates a path, repeated spaces included."""
        packages = parse_package_output("x\t1\t /etc/x  /etc/y \n")
        assert packages[0].config_files == ("", "/etc/x", "", "/etc/y", "")

    def test_extra_tab_fields_ignored(self) -> None:
        """Test fields after the third are ignored."""
        packages = parse_package_output("x\t1\t/etc/x\tjunk\n")
        assert packages[0].config_files == ("/etc/x",)


class TestPackageCollector:
    """Tests for PackageCollector."""

    def test_debian_query(self, probe_config, logger) -> None:
        """Test the Debian backend runs dpkg-query once and parses its output."""
        runner = FakeCommandRunner(b"openssh-server\t1:8.9p1\t/etc/ssh/sshd_config\nbash\t5.1\n")
        collector = PackageCollector(probe_config, logger, PackageBackendKind.DEBIAN, runner)

        packages = collector.collect()

        assert runner.calls == [list(QUERY_COMMANDS[PackageBackendKind.DEBIAN])]
        assert runner.calls[0][0] == "dpkg-query"
        assert [package.name for package in packages] == ["openssh-server", "bash"]

    def test_rpm_query(self, probe_config, logger) -> None:
        """Test the RPM backend requests the tab-delimited query format."""
        runner = FakeCommandRunner(b"httpd\t2.4.57\t/etc/httpd/conf/httpd.conf\n")
        collector = PackageCollector(probe_config, logger, PackageBackendKind.RPM, runner)

        packages = collector.collect()

        assert runner.calls[0][:3] == ["rpm", "-qa", "--queryformat"]
        assert "%{CONFIGFILES}" in runner.calls[0][3]
        assert packages[0].config_files == ("/etc/httpd/conf/httpd.conf",)

    def test_invalid_utf8_replaced(self, probe_config, logger) -> None:
        """Test undecodable bytes do not abort parsing."""
        runner = FakeCommandRunner(b"caf\xe9\t1.0\n")
        packages = PackageCollector(probe_config, logger, PackageBackendKind.DEBIAN, runner).collect()
        assert packages[0].name == "caf�"

    def test_query_failure_is_fatal(self, probe_config, logger) -> None:
        """Test a failing query propagates without a partial list."""
        error = PackageQueryError(["dpkg-query"], "dpkg-query introuvable")
        runner = FakeCommandRunner(error=error)
        collector = PackageCollector(probe_config, logger, PackageBackendKind.DEBIAN, runner)

        with pytest.raises(PackageQueryError):
            collector.collect()
        assert len(runner.calls) == 1
