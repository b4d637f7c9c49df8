# sv_core/constants.py

SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
SEED_SIZE = 32
PRIVATE_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE

SIGNATURE_HEX_LEN = SIGNATURE_SIZE * 2
PUBLIC_KEY_HEX_LEN = PUBLIC_KEY_SIZE * 2

DEFAULT_MARKER = "----Ed25519 Signature----"

DIALECT_CRLF = "crlf"
DIALECT_LF = "lf"
DEFAULT_DIALECT = DIALECT_CRLF

PUBKEY_FILE = "pubkey"
SECKEY_FILE = "seckey"
