"""
Shared pytest fixtures for legal engine tests.

Provides engine instances, language profiles and sample documents for unit
and integration tests.
"""

import pytest

from legal_engine.config import EngineSettings
from legal_engine.engine import create_engine
from legal_engine.services.language_profiles import build_default_registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture(scope="session")
def profiles():
    """Default language profile registry (en, ja, de, fr)."""
    return build_default_registry()


@pytest.fixture
def en_profile(profiles):
    return profiles["en"]


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture(scope="session")
def engine():
    """Engine with default settings, shared read-only across tests."""
    return create_engine()


@pytest.fixture
def sample_contract_text():
    """Sample contract text for testing."""
    return """
SERVICE AGREEMENT

This Agreement is entered into as of January 1, 2025 between Acme Corporation ("Client") and TechServ Inc. ("Provider").

1. PAYMENT TERMS
Payment shall be made within 30 days of invoice date.

2. LIMITATION OF LIABILITY
Provider's total liability under this Agreement shall not exceed $1,000,000 in the aggregate.

3. INDEMNIFICATION
Each party shall indemnify the other against third-party claims arising from its breach of this Agreement.

4. TERMINATION
Either party may terminate this Agreement with 30 days written notice.

5. GOVERNING LAW
This Agreement shall be governed by the laws of the State of California.
"""


@pytest.fixture
def high_risk_contract_text():
    """One-sided contract with an uncapped indemnity."""
    return """MASTER SERVICES AGREEMENT

1. Indemnification
The Customer shall indemnify and hold harmless the Provider against any and all losses, at the Provider's sole discretion.
"""


@pytest.fixture
def japanese_nda_text():
    return """秘密保持契約書

第1条（秘密保持）
甲及び乙は、相手方から開示された秘密情報を第三者に開示してはならない。

第2条（損害賠償）
乙は、甲に生じた一切の損害を賠償する。

第3条（準拠法）
本契約は日本法に準拠する。
"""


@pytest.fixture
def german_nda_text():
    return """GEHEIMHALTUNGSVEREINBARUNG

§ 1 Vertraulichkeit
Die Parteien verpflichten sich, alle vertraulichen Informationen geheim zu halten.

§ 2 Haftung
Die Haftung ist begrenzt auf 10.000 EUR.

§ 3 Kündigung
Der Vertrag kann mit einer Frist von drei Monaten gekündigt werden.

§ 4 Anwendbares Recht
Es gilt deutsches Recht.
"""


@pytest.fixture
def french_nda_text():
    return """ACCORD DE CONFIDENTIALITÉ

Article 1 - Confidentialité
Les parties s'engagent à garder confidentielles toutes les informations échangées.

Article 2 - Résiliation
Le présent contrat peut être résilié avec un préavis de trente jours.

Article 3 - Droit applicable
Le présent contrat est régi par le droit français.
"""


@pytest.fixture
def nda_variables():
    return {
        "party_a": "Acme Corp",
        "party_b": "Beta Inc",
        "effective_date": "2026-03-01",
        "jurisdiction": "California",
    }
