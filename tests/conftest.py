"""Shared fixtures for the Parity test suite."""

import os

import pytest
from hypothesis import settings as hypothesis_settings

hypothesis_settings.register_profile("ci", max_examples=200)
hypothesis_settings.register_profile("dev", max_examples=50)
hypothesis_settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


RULE = "=" * 56
DASH = "-" * 50


def bracketed_header(title: str) -> str:
    return f"{RULE}\n[ SECTION ] {title}\n{RULE}\n"


def labelled_header(title: str, command: str) -> str:
    return f"{RULE}\n說明: {title}\n指令: {command}\n{DASH}\n"


BRACKETED_BEFORE = (
    "Host: web01\n"
    "Scan: 2025-01-15\n"
    + bracketed_header("Firewall")
    + "rule1\nrule2\n\n"
    + bracketed_header("SSH")
    + "PermitRootLogin yes\nPort 22\n"
    + bracketed_header("Banner")
    + "Authorized use only\n"
)

BRACKETED_AFTER = (
    "Host: web01\n"
    "Scan: 2025-01-15\n"
    + bracketed_header("Firewall")
    + "rule1\nrule2\n"
    + bracketed_header("SSH")
    + "PermitRootLogin no\nPort 22\n"
    + bracketed_header("Audit")
    + "auditd enabled\n"
)

LABELLED_LOG = (
    labelled_header("Password Policy", "passwd -S")
    + "min_len=8\n"
    + labelled_header("Audit Daemon", "")
    + "auditd on\n"
)


@pytest.fixture
def bracketed_before() -> str:
    return BRACKETED_BEFORE


@pytest.fixture
def bracketed_after() -> str:
    return BRACKETED_AFTER


@pytest.fixture
def labelled_log() -> str:
    return LABELLED_LOG


@pytest.fixture
def log_files(tmp_path):
    """Before/after logs written to disk."""
    before = tmp_path / "before.txt"
    after = tmp_path / "after.log"
    before.write_text(BRACKETED_BEFORE, encoding="utf-8")
    after.write_text(BRACKETED_AFTER, encoding="utf-8")
    return before, after
