"""Fixed values of the ES256 profile."""

ALGORITHM = "ES256"
KEY_TYPE = "EC"
CURVE_NAME = "P-256"
COORDINATE_SIZE = 32
SIGNATURE_SIZE = 2 * COORDINATE_SIZE

DEFAULT_TYP = "trustlist+jwt"
DEFAULT_KID = "trust-list-signer-2025"
