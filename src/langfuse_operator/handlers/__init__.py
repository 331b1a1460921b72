"""Handler modules for CRD resources."""

# Import handlers to register them - all handlers register themselves via @kopf decorators
from . import organization  # noqa: F401
from . import organization_api_key  # noqa: F401
from . import project  # noqa: F401
from . import project_api_key  # noqa: F401
