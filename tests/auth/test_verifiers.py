"""Tests for the bundled credential verifiers and credential loading."""

from __future__ import annotations

import logging

import pytest

from basic_gate.auth.protocol import CredentialVerifier
from basic_gate.auth.verifiers import (
    FakeVerifier,
    StaticVerifier,
    load_credentials,
    parse_credential_entries,
    parse_credential_entry,
)
from basic_gate.errors import ConfigurationError


class TestStaticVerifier:
    def test_implements_protocol(self):
        assert isinstance(StaticVerifier({"a": "b"}), CredentialVerifier)

    def test_accepts_known_pair(self):
        verifier = StaticVerifier({"jeff": "s3cret"})
        assert verifier.check("jeff", "s3cret") is True

    def test_rejects_wrong_password(self):
        verifier = StaticVerifier({"jeff": "s3cret"})
        assert verifier.check("jeff", "guess") is False

    def test_rejects_unknown_user(self):
        verifier = StaticVerifier({"jeff": "s3cret"})
        assert verifier.check("walter", "s3cret") is False

    def test_non_ascii_password(self):
        verifier = StaticVerifier({"jörg": "pässwörd"})
        assert verifier.check("jörg", "pässwörd") is True
        assert verifier.check("jörg", "passwort") is False

    def test_copies_mapping(self):
        source = {"jeff": "s3cret"}
        verifier = StaticVerifier(source)
        source["jeff"] = "changed"
        assert verifier.check("jeff", "s3cret") is True
        assert len(verifier) == 1

    def test_repr_hides_passwords(self):
        assert "s3cret" not in repr(StaticVerifier({"jeff": "s3cret"}))


class TestFakeVerifier:
    @pytest.mark.parametrize("result", [True, False])
    def test_fixed_answer(self, result):
        verifier = FakeVerifier(result)
        assert verifier.check("any", "thing") is result
        assert verifier.check("", "") is result


class TestParseCredentialEntries:
    def test_splits_at_first_colon(self):
        assert parse_credential_entry("user:pa:ss") == ("user", "pa:ss")

    def test_empty_password_allowed(self):
        assert parse_credential_entry("user:") == ("user", "")

    @pytest.mark.parametrize("entry", ["nocolon", ":password", ""])
    def test_malformed_entry(self, entry):
        with pytest.raises(ConfigurationError):
            parse_credential_entry(entry)

    def test_blank_entries_skipped(self):
        assert parse_credential_entries(["a:1", " ", "", "b:2"]) == {"a": "1", "b": "2"}

    def test_duplicate_user_keeps_last(self, caplog):
        with caplog.at_level(logging.WARNING, logger="basic_gate"):
            result = parse_credential_entries(["a:1", "a:2"])
        assert result == {"a": "2"}
        assert "Duplicate credential entry" in caplog.text


class TestLoadCredentials:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "users"
        path.write_text("# accounts\n\njeff:s3cret\nwalter:pa:ss\n", encoding="utf-8")
        assert load_credentials(path) == {"jeff": "s3cret", "walter": "pa:ss"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read credentials file"):
            load_credentials(tmp_path / "missing")

    def test_malformed_line_reports_line_number(self, tmp_path):
        path = tmp_path / "users"
        path.write_text("jeff:s3cret\nbroken\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="line 2"):
            load_credentials(path)
