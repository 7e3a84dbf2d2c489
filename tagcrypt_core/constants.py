# tagcrypt_core/constants.py

# secretbox parameters (XSalsa20-Poly1305)
NONCE_SIZE = 24
KEY_SIZE = 32

# Convention tag literals. These are part of the wire format; do not change.
ID_PREFIX = "id:"
CREATED_PREFIX = "created:"
ALL_TAG = "all"

# created:<ts> values sort lexically in time order
TIME_FORMAT = "%Y%m%d%H%M%S"

# Wire field names
WIRE_DATA = "data"
WIRE_TAGS = "tags"
WIRE_NONCE = "nonce"
