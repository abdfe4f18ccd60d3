"""Application-wide constants."""

# ──────────────────────────────────────────────────────────────────────
# Cookies
# ──────────────────────────────────────────────────────────────────────

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

# Identity provider access token, forwarded to the workflow engine as Bearer
KEYCLOAK_TOKEN_COOKIE = "kcAccessToken"

# ──────────────────────────────────────────────────────────────────────
# Workflow engine
# ──────────────────────────────────────────────────────────────────────

CAMUNDA_AUTH_HEADER = "X-Camunda-Auth"

# ──────────────────────────────────────────────────────────────────────
# Domains & tasks
# ──────────────────────────────────────────────────────────────────────

WORKSTREAM_TASK_TYPE = "workstream_basic"

# Role preselected on role cards
DEFAULT_ROLE_ID = "visitor"

DEFAULT_REGION = "Global"

# Default navigation shown when a domain has none configured.
# ``{slug}`` is replaced with the domain slug.
DEFAULT_NAVIGATION = [
    {"id": "home", "name": "Home", "href": "/{slug}", "icon": "home"},
    {"id": "dashboards", "name": "Dashboards", "href": "/{slug}/dashboards", "icon": "dashboards"},
    {"id": "teams", "name": "Teams", "href": "/{slug}/teams", "icon": "teams"},
    {"id": "organogram", "name": "Organogram", "href": "/{slug}/organogram", "icon": "organogram"},
    {"id": "workstreams", "name": "Workstreams", "href": "/{slug}/workstreams", "icon": "workstreams"},
]
