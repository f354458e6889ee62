# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable

import pytest

from statutory_filings.config.settings import CompaniesHouseCredentials, HMRCCredentials
from statutory_filings.domain.entities.financial_statements import FinancialStatementSet
from tests.fixtures.filings_testkit import FakeFeeCollector, RecordingSleep, statement_set


@pytest.fixture
def ch_credentials() -> CompaniesHouseCredentials:
    return CompaniesHouseCredentials(
        presenter_id="PRESENTER01",
        password="auth-code",
        email="filings@acme.example",
    )


@pytest.fixture
def hmrc_credentials() -> HMRCCredentials:
    return HMRCCredentials(sender_id="CTUser100", password="password", utr="8596148860")


@pytest.fixture
def fee_collector() -> FakeFeeCollector:
    return FakeFeeCollector()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_statement_set() -> Callable[..., FinancialStatementSet]:
    return statement_set
