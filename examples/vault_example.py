#!/usr/bin/env python3
"""
Example of managing a vault, submitting straight to Soroban RPC.
"""
import logging
import os

from acta_sdk import (
    ActaClient, VaultOperations, VaultReader, SorobanRpcTransport, build_did
)


class PasteSigner:
    """Signer that asks for the signed XDR on stdin"""

    def sign_transaction(self, unsigned_xdr, network_passphrase):
        print(f"\nSign for '{network_passphrase}':\n{unsigned_xdr}\n")
        return input("Signed XDR: ").strip()


def main():
    """
    Demonstrate the vault lifecycle.

    This example shows how to:
    1. Create a vault for the owner
    2. Authorize an issuer, sending the signed transaction to the ledger directly
    3. List the credentials stored in the vault
    """
    logging.basicConfig(level=logging.INFO)

    OWNER = os.environ.get("ACTA_OWNER")
    ISSUER = os.environ.get("ACTA_ISSUER")

    if not OWNER or not ISSUER:
        print("ERROR: ACTA_OWNER and ACTA_ISSUER environment variables are required")
        return

    client = ActaClient(os.environ.get("ACTA_BASE_URL", "https://acta.build/api/testnet"))
    vault = VaultOperations(client)
    signer = PasteSigner()

    outcome = vault.create_vault(OWNER, build_did(OWNER, client.network), signer)
    print(f"Vault created: {outcome.tx_id}")

    with SorobanRpcTransport.from_network(client.network) as ledger:
        outcome = vault.authorize_issuer(OWNER, ISSUER, signer, ledger=ledger)

    if outcome.resolved:
        print(f"Issuer authorized: {outcome.tx_id} ({outcome.attempts} status checks)")
    else:
        print(f"Still pending after {outcome.attempts} checks, look up {outcome.tx_id} later")

    reader = VaultReader(client)
    for vc_id in reader.list_vc_ids(OWNER):
        print(f"  - {vc_id}: {reader.verify_vc(OWNER, vc_id).status}")

    client.close()


if __name__ == "__main__":
    main()
