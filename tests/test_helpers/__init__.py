from .client_creator import (
    create_test_client,
    RecordingSigner,
    FailingSigner,
    TEST_BASE_URL,
    TEST_MAINNET_URL,
    TEST_API_KEY,
    TEST_CONTRACT,
    TEST_OWNER,
    TEST_ISSUER,
    TEST_PASSPHRASE,
    TEST_RPC_URL,
    CONFIG_BODY,
)
from .http_server import LocalServer
