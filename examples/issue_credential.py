#!/usr/bin/env python3
"""
Example of issuing a verifiable credential with the ACTA SDK.
"""
import logging
import os
import uuid

from acta_sdk import ActaClient, CredentialOperations, ActaError, TESTNET_URL


def paste_signer(unsigned_xdr, opts):
    """
    Sign by hand: paste the XDR into a wallet (or Stellar Lab) and paste the
    signed XDR back.
    """
    print("\nSign this transaction for network:")
    print(f"  {opts['networkPassphrase']}")
    print(f"\n{unsigned_xdr}\n")
    return input("Signed XDR: ").strip()


def main():
    """
    Demonstrate credential issuance.

    This example shows how to:
    1. Initialize the client (API key from ACTA_API_KEY_TESTNET or ACTA_API_KEY)
    2. Issue a credential, letting the SDK build the holder DID and @context
    3. Check the credential status
    """
    logging.basicConfig(level=logging.INFO)

    OWNER = os.environ.get("ACTA_OWNER")
    ISSUER = os.environ.get("ACTA_ISSUER")
    HOLDER = os.environ.get("ACTA_HOLDER", OWNER)

    if not OWNER or not ISSUER:
        print("ERROR: ACTA_OWNER and ACTA_ISSUER environment variables are required")
        return

    with ActaClient(os.environ.get("ACTA_BASE_URL", TESTNET_URL)) as client:
        credentials = CredentialOperations(client)
        vc_id = f"urn:uuid:{uuid.uuid4()}"

        try:
            outcome = credentials.issue(
                owner=OWNER,
                vc_id=vc_id,
                vc_data={
                    "type": ["VerifiableCredential", "EducationCredential"],
                    "credentialSubject": {"degree": "BSc Computer Science"},
                },
                issuer=ISSUER,
                holder=HOLDER,
                signer=paste_signer,
                issuer_did=ISSUER,
            )
        except ActaError as e:
            print(f"Error issuing credential: {e}")
            return

        print(f"Credential {vc_id} issued in transaction {outcome.tx_id}")

        status = client.verify_status(vc_id)
        print(f"Status: {status.status}")


if __name__ == "__main__":
    main()
