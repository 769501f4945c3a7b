"""
Tests for credential issuance and revocation.
"""
import json
import re

import pytest

from acta_sdk import CredentialOperations
from acta_sdk.exceptions import (
    ConfigurationMissingError, InvalidInputError, MalformedDocumentError, TransactionFailedError
)
from acta_sdk.ledger import StubTransport
from acta_sdk.utils import REQUIRED_CONTEXT
from tests.test_helpers import (
    TEST_BASE_URL, TEST_CONTRACT, TEST_ISSUER, TEST_MAINNET_URL, TEST_OWNER,
    TEST_PASSPHRASE, create_test_client
)

ISSUE_PATH = "/contracts/vc/issue"
REVOKE_PATH = "/contracts/vc/revoke"
PREPARED = {"xdr": "UNSIGNED", "network": TEST_PASSPHRASE}
ISO_MILLIS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _dual_mode(requests_mock, url, tx_id="tx-1"):
    def respond(request, context):
        return {"tx_id": tx_id} if "signedXdr" in request.json() else PREPARED
    return requests_mock.post(url, json=respond)


@pytest.fixture
def credentials(client):
    return CredentialOperations(client)


def test_issue_normalizes_holder_and_context(credentials, signer, mock_config, requests_mock):
    route = _dual_mode(requests_mock, f"{TEST_BASE_URL}{ISSUE_PATH}")

    outcome = credentials.issue(
        owner=TEST_OWNER,
        vc_id="vc-1",
        vc_data={"claim": "x"},
        issuer=TEST_ISSUER,
        holder="G_ADDR",
        signer=signer,
    )

    assert outcome.accepted
    assert outcome.tx_id == "tx-1"

    body = route.request_history[0].json()
    assert body["holder"] == "did:pkh:stellar:testnet:G_ADDR"
    assert body["sourcePublicKey"] == TEST_ISSUER
    assert body["contractId"] == TEST_CONTRACT
    assert "issuerDid" not in body

    document = json.loads(body["vcData"])
    assert document["claim"] == "x"
    for url in REQUIRED_CONTEXT:
        assert url in document["@context"]

    assert route.request_history[1].json() == {"signedXdr": "signed:UNSIGNED"}


def test_issue_keeps_existing_dids(credentials, signer, mock_config, requests_mock):
    route = _dual_mode(requests_mock, f"{TEST_BASE_URL}{ISSUE_PATH}")
    holder = "did:pkh:stellar:mainnet:GHOLDER"

    credentials.issue(TEST_OWNER, "vc-1", "{}", TEST_ISSUER, holder, signer, issuer_did=TEST_ISSUER)

    body = route.request_history[0].json()
    assert body["holder"] == holder
    assert body["issuerDid"] == f"did:pkh:stellar:testnet:{TEST_ISSUER}"


def test_issue_uses_client_network_for_dids(signer, requests_mock):
    client = create_test_client(base_url=TEST_MAINNET_URL)
    route = _dual_mode(requests_mock, f"{TEST_MAINNET_URL}{ISSUE_PATH}")

    CredentialOperations(client).issue(
        TEST_OWNER, "vc-1", {}, TEST_ISSUER, "GHOLDER", signer, contract_id="CMAIN"
    )

    assert route.request_history[0].json()["holder"] == "did:pkh:stellar:mainnet:GHOLDER"


def test_issue_rejects_malformed_document(credentials, signer, mock_config, requests_mock):
    route = _dual_mode(requests_mock, f"{TEST_BASE_URL}{ISSUE_PATH}")

    with pytest.raises(MalformedDocumentError):
        credentials.issue(TEST_OWNER, "vc-1", "{oops", TEST_ISSUER, "GHOLDER", signer)

    assert not route.called
    assert signer.calls == []


def test_issue_rejects_empty_holder(credentials, signer):
    with pytest.raises(InvalidInputError):
        credentials.issue(TEST_OWNER, "vc-1", {}, TEST_ISSUER, "", signer, contract_id=TEST_CONTRACT)


def test_issue_without_contract(credentials, signer, requests_mock):
    requests_mock.get(f"{TEST_BASE_URL}/config", json={"actaContractId": None})
    with pytest.raises(ConfigurationMissingError):
        credentials.issue(TEST_OWNER, "vc-1", {}, TEST_ISSUER, "GHOLDER", signer)


def test_issue_rejected_by_ledger(credentials, signer, mock_config, requests_mock):
    _dual_mode(requests_mock, f"{TEST_BASE_URL}{ISSUE_PATH}")
    ledger = StubTransport(statuses=["PENDING", "FAILED"])

    with pytest.raises(TransactionFailedError):
        credentials.issue(TEST_OWNER, "vc-1", {}, TEST_ISSUER, "GHOLDER", signer, ledger=ledger)


def test_revoke_with_explicit_date(credentials, signer, mock_config, requests_mock):
    route = _dual_mode(requests_mock, f"{TEST_BASE_URL}{REVOKE_PATH}", tx_id="tx-r")

    outcome = credentials.revoke(TEST_OWNER, "vc-1", signer, date="2025-03-01T12:00:00.000Z")

    assert outcome.tx_id == "tx-r"
    assert route.request_history[0].json() == {
        "vcId": "vc-1",
        "date": "2025-03-01T12:00:00.000Z",
        "contractId": TEST_CONTRACT,
        "sourcePublicKey": TEST_OWNER,
    }


def test_revoke_defaults_date_to_now(credentials, signer, mock_config, requests_mock):
    route = _dual_mode(requests_mock, f"{TEST_BASE_URL}{REVOKE_PATH}")

    credentials.revoke(TEST_OWNER, "vc-1", signer)

    body = route.request_history[0].json()
    assert ISO_MILLIS.match(body["date"])
    assert "owner" not in body
