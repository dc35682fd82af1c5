"""Header names shared by the proxy route, the builder and the assembler."""

# Consumed from the client
HEADER_ENABLED = "x-generative-enabled"
HEADER_PERSONALITY = "x-generative-personality"
HEADER_CUSTOMIZE_HOST = "x-customize-host"
HEADER_ADMIN_TOKEN = "x-admin-token"

# Produced on the response
HEADER_CUSTOMIZED = "x-customized"
HEADER_ERRORS = "x-errors"
HEADER_PROFILE = "x-generative-profile"
HEADER_DEBUG = "x-debug"

# Never forwarded upstream
CONTROL_HEADERS = frozenset({
    HEADER_ENABLED,
    HEADER_PERSONALITY,
    HEADER_CUSTOMIZE_HOST,
    HEADER_ADMIN_TOKEN,
})

# Connection-scoped, never forwarded in either direction
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
})

ENABLED_VALUES = frozenset({"1", "true"})
